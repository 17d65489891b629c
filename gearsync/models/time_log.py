"""작업 시간 기록 SQLAlchemy ORM 모델 정의.

Time log SQLAlchemy ORM model definition.

Tables:
    - time_logs: 직원 작업 시간 (Employee work intervals on an appointment or project)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Text, DateTime, Integer, ForeignKey, CheckConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gearsync.database import Base


class TimeLog(Base):
    """작업 시간 모델 — 직원이 기록한 작업 구간.

    TimeLog model — A work interval logged by an employee against exactly
    one appointment or one project. duration_minutes is always derived
    from start_time and end_time.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        employee_id: 기록 직원 FK (Logging employee)
        appointment_id: 대상 예약 FK (Appointment worked on, nullable)
        project_id: 대상 프로젝트 FK (Project worked on, nullable)
        start_time: 시작 일시, naive UTC (Start of work)
        end_time: 종료 일시, naive UTC (End of work)
        duration_minutes: 작업 시간(분) (Derived duration)
        work_description: 작업 내용 (What was done)
        notes: 메모 (Optional notes)

    Constraints:
        ck_time_log_single_target: 예약/프로젝트 중 정확히 하나 (Exactly one target)
    """

    __tablename__ = "time_logs"

    # 기록 고유 식별자 — Time log unique identifier
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    employee_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    appointment_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("appointments.id", ondelete="CASCADE"), nullable=True, index=True)
    project_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=True, index=True)
    start_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    work_description: Mapped[str] = mapped_column(Text, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        CheckConstraint(
            "(appointment_id IS NULL) <> (project_id IS NULL)",
            name="ck_time_log_single_target",
        ),
    )

    # 관계 — Relationships
    employee = relationship("User", lazy="selectin")
