"""사용자, 직원 및 프로필 관련 Pydantic 요청/응답 스키마 정의.

User, employee and profile Pydantic request/response schema definitions.
Covers admin provisioning of staff accounts, employee management,
customer summaries and self-service profile management.
"""

from datetime import datetime
from pydantic import BaseModel, Field

from gearsync.schemas.vehicle import VehicleResponse


class UserResponse(BaseModel):
    """사용자 응답 스키마.

    User response schema returned from API (no credentials).

    Attributes:
        id: 사용자 UUID (User unique identifier)
        email: 이메일 (Login email)
        first_name: 이름 (First name)
        last_name: 성 (Last name)
        phone_number: 전화번호 (Phone number, nullable)
        role: 역할 (CUSTOMER | EMPLOYEE | ADMIN)
        is_active: 활성 상태 (Account active status)
        is_first_login: 임시 비밀번호 사용 여부 (Temporary password in use)
        created_at: 생성 일시 (Creation timestamp)
    """

    id: str  # 사용자 UUID 문자열 (User UUID as string)
    email: str
    first_name: str
    last_name: str
    phone_number: str | None
    role: str
    is_active: bool
    is_first_login: bool
    created_at: datetime


class StaffCreateRequest(BaseModel):
    """직원/관리자 계정 생성 요청 스키마.

    Employee or admin provisioning request schema.
    The server generates a temporary password and emails it.

    Attributes:
        email: 로그인 이메일 (Login email, unique)
        first_name: 이름 (First name)
        last_name: 성 (Last name)
        phone_number: 전화번호 (Phone number, optional)
    """

    email: str = Field(min_length=3, max_length=255)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone_number: str | None = Field(default=None, max_length=30)


class EmployeeUpdate(BaseModel):
    """직원 정보 수정 요청 스키마 (부분 업데이트).

    Employee update request schema (partial update).
    Setting is_active to False prevents login and new assignments.
    """

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    phone_number: str | None = Field(default=None, max_length=30)
    is_active: bool | None = None  # 활성 상태 변경 (Activate/deactivate, optional)


class EmployeeDetailResponse(UserResponse):
    """직원 상세 응답 — 업무 통계 포함.

    Employee detail response with workload statistics.

    Attributes:
        assigned_appointment_count: 배정된 예약 수 (All assigned appointments)
        completed_appointment_count: 완료한 예약 수 (Completed appointments)
        assigned_project_count: 배정된 프로젝트 수 (All assigned projects)
        completed_project_count: 완료한 프로젝트 수 (Completed projects)
    """

    assigned_appointment_count: int = 0
    completed_appointment_count: int = 0
    assigned_project_count: int = 0
    completed_project_count: int = 0


class CustomerSummaryResponse(UserResponse):
    """고객 요약 응답 — 차량 목록 및 이용 통계 포함.

    Customer summary with owned vehicles and usage totals.
    """

    vehicles: list[VehicleResponse] = []
    vehicle_count: int = 0
    appointment_count: int = 0
    project_count: int = 0


class ProfileUpdate(BaseModel):
    """고객 프로필 수정 요청 스키마 (부분 업데이트).

    Customer profile update request schema. Email and role are not editable.
    """

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    phone_number: str | None = Field(default=None, max_length=30)
