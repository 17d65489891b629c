"""프로젝트 관련 Pydantic 요청/응답 스키마 정의.

Project Pydantic request/response schema definitions.
Covers customer requests, admin approval/rejection/assignment and
employee progress updates.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID
from pydantic import BaseModel, Field

from gearsync.models.project import ProjectStatus


class ProjectCreate(BaseModel):
    """프로젝트 요청 생성 스키마.

    Customer project request schema. New projects start as PENDING.

    Attributes:
        vehicle_id: 대상 차량 UUID (Customer-owned vehicle)
        name: 프로젝트 이름 (Short name)
        description: 요청 내용 (What the customer wants done)
        additional_notes: 추가 메모 (Optional notes)
    """

    vehicle_id: UUID
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    additional_notes: str | None = None


class ProjectUpdate(BaseModel):
    """프로젝트 수정 요청 스키마 (PENDING 상태에서만 허용)."""

    vehicle_id: UUID | None = None
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    additional_notes: str | None = None


class ProjectApproveRequest(BaseModel):
    """프로젝트 승인 요청 스키마.

    Admin approval of a PENDING project.

    Attributes:
        employee_id: 배정 직원 UUID (Employee to assign)
        estimated_cost: 예상 비용 (Cost estimate, > 0)
        estimated_duration_hours: 예상 소요 시간 (Duration estimate in hours, > 0)
        expected_completion_date: 완료 예정 일시 (Optional)
        approval_notes: 승인 메모 (Appended to the description, optional)
    """

    employee_id: UUID
    estimated_cost: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    estimated_duration_hours: int = Field(gt=0)
    expected_completion_date: datetime | None = None
    approval_notes: str | None = None


class ProjectRejectRequest(BaseModel):
    """프로젝트 거절 요청 스키마 (Rejection reason is appended to the description)."""

    reason: str = Field(min_length=1)


class ProjectAssignRequest(BaseModel):
    """프로젝트 직원 (재)배정 요청 스키마.

    Admin (re)assignment of an approved project; replaces the estimate.
    """

    employee_id: UUID
    estimated_cost: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    estimated_duration_hours: int = Field(gt=0)
    admin_notes: str | None = None


class ProjectStatusUpdate(BaseModel):
    """직원 프로젝트 진행 상태 변경 요청 스키마.

    Employee progress update on an assigned project.
    actual_cost is applied when the project is completed.
    """

    status: ProjectStatus | None = None
    progress_percentage: int | None = Field(default=None, ge=0, le=100)
    actual_cost: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)


class ProjectResponse(BaseModel):
    """프로젝트 응답 스키마 (Project response with flattened relations)."""

    id: str
    customer_id: str
    customer_name: str
    vehicle_id: str
    vehicle_registration: str
    employee_id: str | None
    employee_name: str | None
    name: str
    description: str
    additional_notes: str | None
    status: str
    estimated_cost: Decimal | None
    actual_cost: Decimal | None
    estimated_duration_hours: int | None
    progress_percentage: int
    start_date: datetime | None
    expected_completion_date: datetime | None
    completion_date: datetime | None
    created_at: datetime
    updated_at: datetime
