"""작업 시간 관련 Pydantic 요청/응답 스키마 정의.

Time log Pydantic request/response schema definitions.
Duration is never accepted from clients; it is derived on the server.
"""

from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field


class TimeLogCreate(BaseModel):
    """작업 시간 기록 생성 요청 스키마.

    Time log creation request schema.
    Exactly one of appointment_id / project_id must be given.

    Attributes:
        appointment_id: 대상 예약 UUID (Appointment worked on)
        project_id: 대상 프로젝트 UUID (Project worked on)
        start_time: 시작 일시 (Start of work)
        end_time: 종료 일시 (End of work, not in the future)
        work_description: 작업 내용 (What was done)
        notes: 메모 (Optional notes)
    """

    appointment_id: UUID | None = None
    project_id: UUID | None = None
    start_time: datetime
    end_time: datetime
    work_description: str = Field(min_length=1)
    notes: str | None = None


class TimeLogUpdate(BaseModel):
    """작업 시간 기록 수정 요청 스키마 (부분 업데이트)."""

    start_time: datetime | None = None
    end_time: datetime | None = None
    work_description: str | None = Field(default=None, min_length=1)
    notes: str | None = None


class TimeLogResponse(BaseModel):
    """작업 시간 기록 응답 스키마."""

    id: str
    employee_id: str
    employee_name: str
    appointment_id: str | None
    project_id: str | None
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    work_description: str
    notes: str | None
    created_at: datetime
