"""예약 레포지토리 — 예약 목록, 중복 검사 및 집계 쿼리.

Appointment Repository — Listing, duplicate-slot checks and aggregate
queries for appointments. Dashboard counts and sums are computed here so
services stay free of SQL.
"""

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.models.appointment import Appointment, AppointmentStatus, TERMINAL_APPOINTMENT_STATUSES
from gearsync.repositories.base import BaseRepository


class AppointmentRepository(BaseRepository[Appointment]):
    """예약 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the appointments table.
    """

    def __init__(self) -> None:
        super().__init__(Appointment)

    async def _list(self, db: AsyncSession, query: Select) -> list[Appointment]:
        result = await db.execute(query)
        return list(result.scalars().all())

    async def _count(self, db: AsyncSession, *conditions) -> int:
        query: Select = select(func.count()).select_from(Appointment).where(*conditions)
        return (await db.execute(query)).scalar() or 0

    async def _sum_final_cost(self, db: AsyncSession, *conditions) -> Decimal:
        query: Select = select(func.coalesce(func.sum(Appointment.final_cost), 0)).where(*conditions)
        total = (await db.execute(query)).scalar()
        return Decimal(str(total or 0)).quantize(Decimal("0.01"))

    async def slot_taken(
        self,
        db: AsyncSession,
        customer_id: UUID,
        scheduled_date_time: datetime,
        exclude_id: UUID | None = None,
    ) -> bool:
        """고객이 같은 시각에 진행 중인 예약을 가지고 있는지 확인합니다.

        Check whether the customer already holds a non-terminal appointment
        at exactly this timestamp.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            customer_id: 고객 ID (Customer UUID)
            scheduled_date_time: 예약 일시, naive UTC (Scheduled time)
            exclude_id: 검사에서 제외할 예약 ID (Appointment to ignore, e.g. the one being updated)

        Returns:
            bool: 중복 여부 (Whether the slot is already taken)
        """
        conditions = [
            Appointment.customer_id == customer_id,
            Appointment.scheduled_date_time == scheduled_date_time,
            Appointment.status.not_in(TERMINAL_APPOINTMENT_STATUSES),
        ]
        if exclude_id is not None:
            conditions.append(Appointment.id != exclude_id)
        return await self._count(db, *conditions) > 0

    async def list_by_customer(self, db: AsyncSession, customer_id: UUID) -> list[Appointment]:
        """고객의 예약 목록, 최신 일정 우선 (Customer appointments, latest first)."""
        return await self._list(
            db,
            select(Appointment)
            .where(Appointment.customer_id == customer_id)
            .order_by(Appointment.scheduled_date_time.desc()),
        )

    async def list_by_employee(self, db: AsyncSession, employee_id: UUID) -> list[Appointment]:
        """직원에게 배정된 예약 목록 (Appointments assigned to an employee, by schedule)."""
        return await self._list(
            db,
            select(Appointment)
            .where(Appointment.employee_id == employee_id)
            .order_by(Appointment.scheduled_date_time),
        )

    async def list_all(
        self,
        db: AsyncSession,
        statuses: Sequence[str] | None = None,
        unassigned_only: bool = False,
    ) -> list[Appointment]:
        """예약 목록을 상태/배정 조건으로 조회합니다.

        List appointments ordered by scheduled time, optionally filtered by
        status and by the absence of an assigned employee.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            statuses: 상태 필터 (Status values to include, None for all)
            unassigned_only: 미배정 예약만 (Only appointments without an employee)

        Returns:
            list[Appointment]: 예약 목록 (List of appointments)
        """
        query: Select = select(Appointment)
        if statuses is not None:
            query = query.where(Appointment.status.in_(list(statuses)))
        if unassigned_only:
            query = query.where(Appointment.employee_id.is_(None))
        return await self._list(db, query.order_by(Appointment.scheduled_date_time))

    async def list_between(
        self,
        db: AsyncSession,
        start: datetime,
        end: datetime,
    ) -> list[Appointment]:
        """기간 내 예약 목록 [start, end) (Appointments scheduled in a half-open window)."""
        return await self._list(
            db,
            select(Appointment)
            .where(Appointment.scheduled_date_time >= start, Appointment.scheduled_date_time < end)
            .order_by(Appointment.scheduled_date_time),
        )

    async def list_upcoming_for_customer(
        self,
        db: AsyncSession,
        customer_id: UUID,
        now: datetime,
        statuses: Sequence[str],
    ) -> list[Appointment]:
        """고객의 다가오는 예약 (Customer appointments after now, soonest first)."""
        return await self._list(
            db,
            select(Appointment)
            .where(
                Appointment.customer_id == customer_id,
                Appointment.scheduled_date_time > now,
                Appointment.status.in_(list(statuses)),
            )
            .order_by(Appointment.scheduled_date_time),
        )

    async def count_all(self, db: AsyncSession, statuses: Sequence[str] | None = None) -> int:
        """전체 또는 상태별 예약 수 (Appointment count, optionally by status)."""
        if statuses is None:
            return await self._count(db)
        return await self._count(db, Appointment.status.in_(list(statuses)))

    async def count_for_customer(
        self,
        db: AsyncSession,
        customer_id: UUID,
        statuses: Sequence[str] | None = None,
    ) -> int:
        """고객별 예약 수 (Customer appointment count, optionally by status)."""
        conditions = [Appointment.customer_id == customer_id]
        if statuses is not None:
            conditions.append(Appointment.status.in_(list(statuses)))
        return await self._count(db, *conditions)

    async def count_for_employee(
        self,
        db: AsyncSession,
        employee_id: UUID,
        statuses: Sequence[str] | None = None,
    ) -> int:
        """직원별 배정 예약 수 (Assigned appointment count, optionally by status)."""
        conditions = [Appointment.employee_id == employee_id]
        if statuses is not None:
            conditions.append(Appointment.status.in_(list(statuses)))
        return await self._count(db, *conditions)

    async def total_completed_revenue(
        self,
        db: AsyncSession,
        customer_id: UUID | None = None,
    ) -> Decimal:
        """완료된 예약의 최종 비용 합계.

        Sum of final_cost over COMPLETED appointments, optionally for one
        customer. Returns 0.00 when there are none.
        """
        conditions = [Appointment.status == AppointmentStatus.COMPLETED.value]
        if customer_id is not None:
            conditions.append(Appointment.customer_id == customer_id)
        return await self._sum_final_cost(db, *conditions)


# 싱글턴 인스턴스 — Singleton instance
appointment_repository: AppointmentRepository = AppointmentRepository()
