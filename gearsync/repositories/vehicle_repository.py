"""차량 레포지토리 — 차량 조회 및 소유자 기준 쿼리.

Vehicle Repository — Lookup and owner-scoped queries for vehicles.
"""

from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.models.appointment import Appointment
from gearsync.models.project import Project
from gearsync.models.vehicle import Vehicle
from gearsync.repositories.base import BaseRepository


class VehicleRepository(BaseRepository[Vehicle]):
    """차량 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the vehicles table.
    """

    def __init__(self) -> None:
        super().__init__(Vehicle)

    async def get_by_registration(
        self,
        db: AsyncSession,
        registration_number: str,
    ) -> Vehicle | None:
        """차량 번호로 차량을 조회합니다 (Retrieve a vehicle by registration number)."""
        result = await db.execute(
            select(Vehicle).where(Vehicle.registration_number == registration_number)
        )
        return result.scalar_one_or_none()

    async def list_by_owner(
        self,
        db: AsyncSession,
        owner_id: UUID,
    ) -> list[Vehicle]:
        """소유자의 차량 목록을 등록순으로 조회합니다.

        List vehicles owned by a customer, oldest first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            owner_id: 소유 고객 ID (Owner UUID)

        Returns:
            list[Vehicle]: 차량 목록 (List of vehicles)
        """
        result = await db.execute(
            select(Vehicle).where(Vehicle.owner_id == owner_id).order_by(Vehicle.created_at)
        )
        return list(result.scalars().all())

    async def list_all(self, db: AsyncSession) -> list[Vehicle]:
        """전체 차량 목록 (All vehicles with owners, by registration number)."""
        result = await db.execute(select(Vehicle).order_by(Vehicle.registration_number))
        return list(result.scalars().all())

    async def has_work_records(
        self,
        db: AsyncSession,
        vehicle_id: UUID,
    ) -> bool:
        """차량에 연결된 예약 또는 프로젝트가 있는지 확인합니다.

        Check whether any appointment or project references the vehicle.
        """
        appointments: int = (
            await db.execute(
                select(func.count()).select_from(Appointment).where(Appointment.vehicle_id == vehicle_id)
            )
        ).scalar() or 0
        if appointments:
            return True
        projects: int = (
            await db.execute(
                select(func.count()).select_from(Project).where(Project.vehicle_id == vehicle_id)
            )
        ).scalar() or 0
        return projects > 0


# 싱글턴 인스턴스 — Singleton instance
vehicle_repository: VehicleRepository = VehicleRepository()
