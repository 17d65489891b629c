"""차량 서비스 — 고객 차량 등록/조회/수정/삭제 비즈니스 로직.

Vehicle Service — Business logic for the customer vehicle registry.
Customers can only see and change their own vehicles.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.models.user import User
from gearsync.models.vehicle import Vehicle
from gearsync.repositories.vehicle_repository import vehicle_repository
from gearsync.schemas.vehicle import VehicleCreate, VehicleResponse, VehicleUpdate
from gearsync.utils.exceptions import DuplicateError, ForbiddenError, InvalidStateError, NotFoundError


def _normalize_registration(value: str) -> str:
    """차량 번호 정규화 — 공백 제거 후 대문자 (Strip and upper-case a plate number)."""
    return value.strip().upper()


class VehicleService:
    """차량 관련 비즈니스 로직을 처리하는 서비스.

    Service handling vehicle business logic.
    """

    def to_response(self, vehicle: Vehicle) -> VehicleResponse:
        """차량 모델을 응답 스키마로 변환합니다.

        Convert a Vehicle model instance to a VehicleResponse schema.

        Args:
            vehicle: 차량 모델, owner 로드됨 (Vehicle with owner loaded)

        Returns:
            VehicleResponse: 차량 응답 (Vehicle response)
        """
        return VehicleResponse(
            id=str(vehicle.id),
            registration_number=vehicle.registration_number,
            make=vehicle.make,
            model=vehicle.model,
            year=vehicle.year,
            color=vehicle.color,
            vin=vehicle.vin,
            mileage=vehicle.mileage,
            owner_id=str(vehicle.owner_id),
            owner_name=vehicle.owner.full_name,
            owner_email=vehicle.owner.email,
            created_at=vehicle.created_at,
        )

    async def get_owned_vehicle(
        self,
        db: AsyncSession,
        owner: User,
        vehicle_id: UUID,
    ) -> Vehicle:
        """고객 소유 차량을 조회합니다.

        Load a vehicle and verify it belongs to the given customer.

        Raises:
            NotFoundError: 차량 없음 (Vehicle not found)
            ForbiddenError: 다른 고객의 차량 (Vehicle owned by someone else)
        """
        vehicle: Vehicle | None = await vehicle_repository.get_by_id(db, vehicle_id)
        if vehicle is None:
            raise NotFoundError("Vehicle not found")
        if vehicle.owner_id != owner.id:
            raise ForbiddenError("You do not own this vehicle")
        return vehicle

    async def create_vehicle(
        self,
        db: AsyncSession,
        owner: User,
        data: VehicleCreate,
    ) -> VehicleResponse:
        """차량을 등록합니다.

        Register a vehicle for the current customer.

        Raises:
            DuplicateError: 차량 번호 중복 (Registration number already registered)
        """
        registration: str = _normalize_registration(data.registration_number)
        if await vehicle_repository.get_by_registration(db, registration) is not None:
            raise DuplicateError(f"Vehicle already registered: {registration}")

        vehicle: Vehicle = await vehicle_repository.create(
            db,
            {
                **data.model_dump(),
                "registration_number": registration,
                "owner_id": owner.id,
            },
        )
        return self.to_response(vehicle)

    async def list_my_vehicles(self, db: AsyncSession, owner: User) -> list[VehicleResponse]:
        """내 차량 목록 (Current customer's vehicles)."""
        vehicles: list[Vehicle] = await vehicle_repository.list_by_owner(db, owner.id)
        return [self.to_response(v) for v in vehicles]

    async def get_vehicle(self, db: AsyncSession, owner: User, vehicle_id: UUID) -> VehicleResponse:
        """내 차량 상세 (One of the current customer's vehicles)."""
        return self.to_response(await self.get_owned_vehicle(db, owner, vehicle_id))

    async def update_vehicle(
        self,
        db: AsyncSession,
        owner: User,
        vehicle_id: UUID,
        data: VehicleUpdate,
    ) -> VehicleResponse:
        """차량 정보를 수정합니다.

        Partially update one of the customer's vehicles.

        Raises:
            NotFoundError / ForbiddenError: 차량 없음 또는 타인 소유
            DuplicateError: 변경할 차량 번호가 이미 존재 (New registration number taken)
        """
        vehicle: Vehicle = await self.get_owned_vehicle(db, owner, vehicle_id)
        update_data: dict = data.model_dump(exclude_unset=True)

        if update_data.get("registration_number") is not None:
            registration: str = _normalize_registration(update_data["registration_number"])
            existing: Vehicle | None = await vehicle_repository.get_by_registration(db, registration)
            if existing is not None and existing.id != vehicle.id:
                raise DuplicateError(f"Vehicle already registered: {registration}")
            update_data["registration_number"] = registration

        for field in ("registration_number", "make", "model", "year"):
            if field in update_data and update_data[field] is None:
                del update_data[field]

        vehicle = await vehicle_repository.update(db, vehicle, update_data)
        return self.to_response(vehicle)

    async def delete_vehicle(self, db: AsyncSession, owner: User, vehicle_id: UUID) -> None:
        """차량을 삭제합니다.

        Delete one of the customer's vehicles.

        Raises:
            InvalidStateError: 예약 또는 프로젝트 이력이 있는 차량 (Vehicle has work records)
        """
        vehicle: Vehicle = await self.get_owned_vehicle(db, owner, vehicle_id)
        if await vehicle_repository.has_work_records(db, vehicle.id):
            raise InvalidStateError("Cannot delete a vehicle with appointments or projects")
        await vehicle_repository.delete(db, vehicle)

    async def list_all_vehicles(self, db: AsyncSession) -> list[VehicleResponse]:
        """전체 차량 목록 — 관리자용 (All vehicles with owner info, admin view)."""
        vehicles: list[Vehicle] = await vehicle_repository.list_all(db)
        return [self.to_response(v) for v in vehicles]


# 싱글턴 인스턴스 — Singleton instance
vehicle_service: VehicleService = VehicleService()
