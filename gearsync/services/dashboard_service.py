"""대시보드 서비스 — 관리자/직원/고객 대시보드 집계.

Dashboard Service — Read-only aggregates for the admin, employee and
customer dashboards.
"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.models.appointment import Appointment, AppointmentStatus
from gearsync.models.user import User
from gearsync.repositories.appointment_repository import appointment_repository
from gearsync.repositories.service_repository import service_repository
from gearsync.repositories.user_repository import user_repository
from gearsync.repositories.vehicle_repository import vehicle_repository
from gearsync.schemas.appointment import AppointmentResponse
from gearsync.services.appointment_service import appointment_service
from gearsync.utils.clock import day_bounds, utcnow

# 고객 기준 진행 중 예약 — Appointment statuses counted as active for a customer
_ACTIVE_STATUSES: list[str] = [
    AppointmentStatus.SCHEDULED.value,
    AppointmentStatus.CONFIRMED.value,
    AppointmentStatus.RESCHEDULED.value,
    AppointmentStatus.IN_PROGRESS.value,
]

# 다가오는 예약 — Statuses shown as upcoming
_UPCOMING_STATUSES: list[str] = [
    AppointmentStatus.SCHEDULED.value,
    AppointmentStatus.CONFIRMED.value,
    AppointmentStatus.RESCHEDULED.value,
]


class AdminDashboardService:
    """관리자 대시보드 서비스.

    Admin dashboard aggregation service.
    """

    async def user_count(self, db: AsyncSession) -> int:
        """전체 사용자 수."""
        return await user_repository.count(db)

    async def appointment_count(self, db: AsyncSession) -> int:
        """전체 예약 수."""
        return await appointment_repository.count_all(db)

    async def vehicle_count(self, db: AsyncSession) -> int:
        """전체 차량 수."""
        return await vehicle_repository.count(db)

    async def total_earnings(self, db: AsyncSession) -> Decimal:
        """완료 예약 최종 비용 합계, 없으면 0."""
        return await appointment_repository.total_completed_revenue(db)

    async def in_progress_count(self, db: AsyncSession) -> int:
        """진행 중 예약 수."""
        return await appointment_repository.count_all(db, [AppointmentStatus.IN_PROGRESS.value])

    async def active_service_count(self, db: AsyncSession) -> int:
        """예약 가능한 서비스 수."""
        return await service_repository.count(db, {"is_active": True})

    async def confirmed_appointments(self, db: AsyncSession) -> list[AppointmentResponse]:
        """확정 예약 목록, 예약 일시순."""
        appointments: list[Appointment] = await appointment_repository.list_all(
            db, statuses=[AppointmentStatus.CONFIRMED.value]
        )
        return [appointment_service.to_response(a) for a in appointments]

    async def todays_appointments(self, db: AsyncSession) -> list[AppointmentResponse]:
        """오늘(UTC) 예약 목록."""
        start, end = day_bounds(utcnow())
        appointments: list[Appointment] = await appointment_repository.list_between(db, start, end)
        return [appointment_service.to_response(a) for a in appointments]


class EmployeeDashboardService:
    """직원 대시보드 서비스.

    Employee dashboard counts, computed by assigned employee.
    """

    async def assigned_count(self, db: AsyncSession, employee: User) -> int:
        """배정된 예약 수."""
        return await appointment_repository.count_for_employee(db, employee.id)

    async def completed_count(self, db: AsyncSession, employee: User) -> int:
        """완료한 예약 수."""
        return await appointment_repository.count_for_employee(
            db, employee.id, [AppointmentStatus.COMPLETED.value]
        )

    async def ongoing_count(self, db: AsyncSession, employee: User) -> int:
        """진행 중 예약 수."""
        return await appointment_repository.count_for_employee(
            db, employee.id, [AppointmentStatus.IN_PROGRESS.value]
        )


class CustomerDashboardService:
    """고객 대시보드 서비스.

    Customer dashboard counts and totals for the caller's own data.
    """

    async def appointment_count(self, db: AsyncSession, customer: User) -> int:
        """내 예약 수."""
        return await appointment_repository.count_for_customer(db, customer.id)

    async def active_appointment_count(self, db: AsyncSession, customer: User) -> int:
        """진행 중인 예약 수."""
        return await appointment_repository.count_for_customer(db, customer.id, _ACTIVE_STATUSES)

    async def completed_count(self, db: AsyncSession, customer: User) -> int:
        """완료된 예약 수."""
        return await appointment_repository.count_for_customer(
            db, customer.id, [AppointmentStatus.COMPLETED.value]
        )

    async def vehicle_count(self, db: AsyncSession, customer: User) -> int:
        """내 차량 수."""
        return await vehicle_repository.count(db, {"owner_id": customer.id})

    async def total_spent(self, db: AsyncSession, customer: User) -> Decimal:
        """완료 예약 최종 비용 합계."""
        return await appointment_repository.total_completed_revenue(db, customer_id=customer.id)

    async def upcoming_appointments(self, db: AsyncSession, customer: User) -> list[AppointmentResponse]:
        """다가오는 예약, 가까운 순."""
        appointments: list[Appointment] = await appointment_repository.list_upcoming_for_customer(
            db, customer.id, utcnow(), _UPCOMING_STATUSES
        )
        return [appointment_service.to_response(a) for a in appointments]


# 싱글턴 인스턴스 — Singleton instances
admin_dashboard_service: AdminDashboardService = AdminDashboardService()
employee_dashboard_service: EmployeeDashboardService = EmployeeDashboardService()
customer_dashboard_service: CustomerDashboardService = CustomerDashboardService()
