"""예약 서비스 — 고객 예약 생성/조회/수정/취소/삭제 비즈니스 로직.

Appointment Service — Customer-facing booking business logic.

Booking validation order:
    1. 차량 존재 (vehicle exists)                      → 404
    2. 차량 소유 (vehicle owned by the customer)       → 403
    3. 미래 일시 (scheduled time in the future)         → 400
    4. 동일 시각 중복 예약 없음 (no duplicate slot)     → 409
    5. 서비스 1개 이상 (at least one service)           → 400
    6. 서비스 존재 (all services exist)                 → 404
    7. 서비스 활성 (all services active)                → 400
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.models.appointment import Appointment, AppointmentStatus
from gearsync.models.catalog import Service
from gearsync.models.user import User
from gearsync.models.vehicle import Vehicle
from gearsync.repositories.appointment_repository import appointment_repository
from gearsync.repositories.service_repository import service_repository
from gearsync.schemas.appointment import AppointmentCreate, AppointmentResponse, AppointmentUpdate
from gearsync.schemas.catalog import ServiceSummary
from gearsync.services.vehicle_service import vehicle_service
from gearsync.utils.clock import to_naive_utc, utcnow
from gearsync.utils.exceptions import (
    BadRequestError,
    DuplicateError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)

# 고객 수정 불가 상태 — Statuses in which the customer can no longer edit
_LOCKED_STATUSES: tuple[str, ...] = (
    AppointmentStatus.IN_PROGRESS.value,
    AppointmentStatus.COMPLETED.value,
    AppointmentStatus.CANCELLED.value,
)

# 삭제 가능 상태 — Statuses from which a customer may delete
_DELETABLE_STATUSES: tuple[str, ...] = (
    AppointmentStatus.SCHEDULED.value,
    AppointmentStatus.CONFIRMED.value,
    AppointmentStatus.RESCHEDULED.value,
)


class AppointmentService:
    """예약 관련 비즈니스 로직을 처리하는 서비스.

    Service handling customer appointment business logic.
    """

    def to_response(self, appointment: Appointment) -> AppointmentResponse:
        """예약 모델을 응답 스키마로 변환합니다.

        Convert an Appointment (with customer, vehicle, employee and services
        loaded) to an AppointmentResponse.

        Args:
            appointment: 예약 모델 (Appointment model instance)

        Returns:
            AppointmentResponse: 예약 응답 (Appointment response)
        """
        vehicle: Vehicle = appointment.vehicle
        employee: User | None = appointment.employee
        return AppointmentResponse(
            id=str(appointment.id),
            customer_id=str(appointment.customer_id),
            customer_name=appointment.customer.full_name,
            vehicle_id=str(appointment.vehicle_id),
            vehicle_registration=vehicle.registration_number,
            vehicle_description=f"{vehicle.year} {vehicle.make} {vehicle.model}",
            employee_id=str(employee.id) if employee else None,
            employee_name=employee.full_name if employee else None,
            scheduled_date_time=appointment.scheduled_date_time,
            status=appointment.status,
            services=[
                ServiceSummary(
                    id=str(s.id),
                    name=s.name,
                    base_price=s.base_price,
                    estimated_duration_minutes=s.estimated_duration_minutes,
                )
                for s in sorted(appointment.services, key=lambda s: s.name)
            ],
            estimated_cost=appointment.estimated_cost,
            final_cost=appointment.final_cost,
            estimated_duration_minutes=appointment.estimated_duration_minutes,
            customer_notes=appointment.customer_notes,
            employee_notes=appointment.employee_notes,
            progress_percentage=appointment.progress_percentage,
            actual_start_time=appointment.actual_start_time,
            actual_end_time=appointment.actual_end_time,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
        )

    async def get_or_404(self, db: AsyncSession, appointment_id: UUID) -> Appointment:
        """예약 조회, 없으면 404 (Load an appointment or raise NotFoundError)."""
        appointment: Appointment | None = await appointment_repository.get_by_id(db, appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment not found")
        return appointment

    async def _get_owned(self, db: AsyncSession, customer: User, appointment_id: UUID) -> Appointment:
        appointment: Appointment = await self.get_or_404(db, appointment_id)
        if appointment.customer_id != customer.id:
            raise ForbiddenError("You do not have access to this appointment")
        return appointment

    def _validate_future(self, scheduled: datetime) -> datetime:
        """예약 일시를 naive UTC로 정규화하고 미래인지 확인합니다."""
        scheduled = to_naive_utc(scheduled)
        if scheduled <= utcnow():
            raise BadRequestError("Appointment date and time must be in the future")
        return scheduled

    async def _resolve_services(self, db: AsyncSession, service_ids: list[UUID]) -> list[Service]:
        """서비스 ID 목록을 검증하고 서비스 모델로 변환합니다.

        Validate a service id list and load the services.

        Raises:
            BadRequestError: 빈 목록 또는 비활성 서비스 (Empty list or inactive service)
            NotFoundError: 존재하지 않는 서비스 (Unknown service id)
        """
        if not service_ids:
            raise BadRequestError("At least one service must be selected")
        unique_ids: set[UUID] = set(service_ids)
        services: list[Service] = await service_repository.get_by_ids(db, unique_ids)
        if len(services) != len(unique_ids):
            raise NotFoundError("One or more selected services were not found")
        inactive: list[str] = sorted(s.name for s in services if not s.is_active)
        if inactive:
            raise BadRequestError(f"Service is not available: {', '.join(inactive)}")
        return services

    def _apply_services(self, appointment: Appointment, services: list[Service]) -> None:
        """서비스 목록과 비용/시간 합계를 적용합니다 (Set services and their totals)."""
        total: Decimal = sum((s.base_price for s in services), Decimal("0.00"))
        appointment.services = services
        appointment.estimated_cost = total
        appointment.final_cost = total
        appointment.estimated_duration_minutes = sum(s.estimated_duration_minutes for s in services)

    async def book_appointment(
        self,
        db: AsyncSession,
        customer: User,
        data: AppointmentCreate,
    ) -> AppointmentResponse:
        """새 예약을 생성합니다.

        Book an appointment for one of the customer's vehicles.
        The new appointment is SCHEDULED with progress 0; estimated and
        final cost start as the sum of the selected services' prices.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            customer: 예약 고객 (Booking customer)
            data: 예약 요청 데이터 (Booking request)

        Returns:
            AppointmentResponse: 생성된 예약 (Created appointment)

        Raises:
            NotFoundError: 차량/서비스 없음 (Vehicle or service not found)
            ForbiddenError: 타인 차량 (Vehicle not owned)
            BadRequestError: 과거 일시, 빈 서비스, 비활성 서비스
            DuplicateError: 동일 시각 예약 존재 (Slot already booked)
        """
        vehicle: Vehicle = await vehicle_service.get_owned_vehicle(db, customer, data.vehicle_id)
        scheduled: datetime = self._validate_future(data.scheduled_date_time)
        if await appointment_repository.slot_taken(db, customer.id, scheduled):
            raise DuplicateError("You already have an appointment at this date and time")
        services: list[Service] = await self._resolve_services(db, data.service_ids)

        appointment: Appointment = Appointment(
            customer=customer,
            vehicle=vehicle,
            scheduled_date_time=scheduled,
            status=AppointmentStatus.SCHEDULED.value,
            customer_notes=data.customer_notes,
            progress_percentage=0,
        )
        self._apply_services(appointment, services)
        appointment = await appointment_repository.save(db, appointment)
        return self.to_response(appointment)

    async def list_my_appointments(self, db: AsyncSession, customer: User) -> list[AppointmentResponse]:
        """내 예약 목록, 최신 일정 우선 (Customer's appointments, latest first)."""
        appointments: list[Appointment] = await appointment_repository.list_by_customer(db, customer.id)
        return [self.to_response(a) for a in appointments]

    async def get_my_appointment(
        self,
        db: AsyncSession,
        customer: User,
        appointment_id: UUID,
    ) -> AppointmentResponse:
        """내 예약 상세 (One of the customer's appointments)."""
        return self.to_response(await self._get_owned(db, customer, appointment_id))

    async def update_appointment(
        self,
        db: AsyncSession,
        customer: User,
        appointment_id: UUID,
        data: AppointmentUpdate,
    ) -> AppointmentResponse:
        """예약을 수정합니다.

        Update vehicle, services, scheduled time or notes. Each given field
        is re-validated with the booking rules; rescheduling a CONFIRMED
        appointment moves it to RESCHEDULED.

        Raises:
            InvalidStateError: 진행 중/완료/취소 상태 (Appointment is locked)
            BadRequestError: 변경할 필드 없음 (No effective field)
        """
        appointment: Appointment = await self._get_owned(db, customer, appointment_id)
        if appointment.status in _LOCKED_STATUSES:
            raise InvalidStateError(f"Cannot update an appointment with status {appointment.status}")

        changes: dict = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        if not changes:
            raise BadRequestError("No valid fields provided for update")

        if "vehicle_id" in changes:
            appointment.vehicle = await vehicle_service.get_owned_vehicle(db, customer, changes["vehicle_id"])

        # 변경된 일시만 재검증 — Only a different time is re-validated
        if (
            "scheduled_date_time" in changes
            and to_naive_utc(changes["scheduled_date_time"]) != appointment.scheduled_date_time
        ):
            scheduled: datetime = self._validate_future(changes["scheduled_date_time"])
            if await appointment_repository.slot_taken(db, customer.id, scheduled, exclude_id=appointment.id):
                raise DuplicateError("You already have an appointment at this date and time")
            appointment.scheduled_date_time = scheduled
            if appointment.status == AppointmentStatus.CONFIRMED.value:
                appointment.status = AppointmentStatus.RESCHEDULED.value

        if "service_ids" in changes:
            self._apply_services(appointment, await self._resolve_services(db, changes["service_ids"]))

        if "customer_notes" in changes:
            appointment.customer_notes = changes["customer_notes"]

        appointment = await appointment_repository.save(db, appointment)
        return self.to_response(appointment)

    async def cancel_appointment(
        self,
        db: AsyncSession,
        customer: User,
        appointment_id: UUID,
    ) -> AppointmentResponse:
        """예약을 취소합니다.

        Cancel one of the customer's appointments.

        Raises:
            InvalidStateError: 이미 취소/완료되었거나 작업 중 (Already cancelled, completed or in progress)
        """
        appointment: Appointment = await self._get_owned(db, customer, appointment_id)
        if appointment.status == AppointmentStatus.CANCELLED.value:
            raise InvalidStateError("Appointment is already cancelled")
        if appointment.status == AppointmentStatus.COMPLETED.value:
            raise InvalidStateError("Cannot cancel a completed appointment")
        if appointment.status == AppointmentStatus.IN_PROGRESS.value:
            raise InvalidStateError("Cannot cancel an appointment that is in progress")

        appointment.status = AppointmentStatus.CANCELLED.value
        appointment = await appointment_repository.save(db, appointment)
        return self.to_response(appointment)

    async def delete_appointment(
        self,
        db: AsyncSession,
        customer: User,
        appointment_id: UUID,
    ) -> None:
        """예약을 삭제합니다.

        Delete one of the customer's appointments. Ownership is checked
        before status so a non-owner always gets 403.

        Raises:
            ForbiddenError: 타인 예약 (Not the owner)
            InvalidStateError: 삭제 불가 상태 (Only SCHEDULED/CONFIRMED/RESCHEDULED)
        """
        appointment: Appointment = await self._get_owned(db, customer, appointment_id)
        if appointment.status not in _DELETABLE_STATUSES:
            raise InvalidStateError(
                f"Cannot delete an appointment with status {appointment.status}. "
                f"Allowed statuses: {', '.join(_DELETABLE_STATUSES)}"
            )
        await appointment_repository.delete(db, appointment)


# 싱글턴 인스턴스 — Singleton instance
appointment_service: AppointmentService = AppointmentService()
