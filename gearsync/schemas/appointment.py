"""예약 관련 Pydantic 요청/응답 스키마 정의.

Appointment Pydantic request/response schema definitions.
Covers customer booking and updates, admin assignment and employee
progress updates.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID
from pydantic import BaseModel, Field

from gearsync.models.appointment import AppointmentStatus
from gearsync.schemas.catalog import ServiceSummary


class AppointmentCreate(BaseModel):
    """예약 생성 요청 스키마.

    Appointment booking request schema.
    An empty service_ids list passes schema validation and is rejected by
    the service with 400.

    Attributes:
        vehicle_id: 대상 차량 UUID (Customer-owned vehicle)
        service_ids: 예약 서비스 UUID 목록 (Catalog services to book)
        scheduled_date_time: 예약 일시 (Future date and time)
        customer_notes: 고객 메모 (Notes for the shop, optional)
    """

    vehicle_id: UUID
    service_ids: list[UUID] = []
    scheduled_date_time: datetime
    customer_notes: str | None = None


class AppointmentUpdate(BaseModel):
    """예약 수정 요청 스키마 (부분 업데이트).

    Appointment update request schema. Each given field is re-validated
    with the booking rules.
    """

    vehicle_id: UUID | None = None
    service_ids: list[UUID] | None = None
    scheduled_date_time: datetime | None = None
    customer_notes: str | None = None


class AppointmentAssignRequest(BaseModel):
    """예약 직원 배정 요청 스키마.

    Admin request to (re)assign an employee to an appointment.

    Attributes:
        employee_id: 배정할 직원 UUID (Employee to assign)
        final_cost: 최종 비용 (Overrides the final cost, optional)
        admin_notes: 관리자 메모 (Appended to employee notes, optional)
    """

    employee_id: UUID
    final_cost: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    admin_notes: str | None = None


class AppointmentStatusUpdate(BaseModel):
    """직원 예약 진행 상태 변경 요청 스키마.

    Employee progress update on an assigned appointment.
    Omitting status updates progress/notes only.
    """

    status: AppointmentStatus | None = None
    progress_percentage: int | None = Field(default=None, ge=0, le=100)
    employee_notes: str | None = None


class AppointmentResponse(BaseModel):
    """예약 응답 스키마.

    Appointment response schema with customer, vehicle, employee and
    service details flattened for display.
    """

    id: str  # 예약 UUID 문자열 (Appointment UUID as string)
    customer_id: str
    customer_name: str
    vehicle_id: str
    vehicle_registration: str  # 차량 번호 (Registration number)
    vehicle_description: str  # "연식 제조사 모델" (e.g. "2020 Toyota Corolla")
    employee_id: str | None
    employee_name: str | None
    scheduled_date_time: datetime
    status: str
    services: list[ServiceSummary]
    estimated_cost: Decimal
    final_cost: Decimal | None
    estimated_duration_minutes: int
    customer_notes: str | None
    employee_notes: str | None
    progress_percentage: int
    actual_start_time: datetime | None
    actual_end_time: datetime | None
    created_at: datetime
    updated_at: datetime
