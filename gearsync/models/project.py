"""프로젝트 SQLAlchemy ORM 모델 정의.

Project SQLAlchemy ORM model definition.
A project is a larger custom job a customer requests; it goes through
admin approval before an employee works on it.

Tables:
    - projects: 고객 프로젝트 요청 (Customer project requests)

Status workflow:
    PENDING → APPROVED | REJECTED (관리자 승인/거절, admin review)
    APPROVED/ON_HOLD → IN_PROGRESS → ON_HOLD | COMPLETED (직원 작업)
"""

import enum
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy import String, Text, DateTime, Integer, Numeric, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gearsync.database import Base


class ProjectStatus(str, enum.Enum):
    """프로젝트 상태 (Project status)."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    IN_PROGRESS = "IN_PROGRESS"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    REJECTED = "REJECTED"


# 직원 배정 가능 상태 — Statuses in which an employee may be (re)assigned
ASSIGNABLE_PROJECT_STATUSES: tuple[str, ...] = (
    ProjectStatus.APPROVED.value,
    ProjectStatus.IN_PROGRESS.value,
    ProjectStatus.ON_HOLD.value,
)


class Project(Base):
    """프로젝트 모델 — 승인이 필요한 대형 작업 요청.

    Project model — A large job request that needs admin approval.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        customer_id: 요청 고객 FK (Requesting customer)
        vehicle_id: 대상 차량 FK (Vehicle the work is for)
        employee_id: 배정 직원 FK (Assigned employee, nullable)
        name: 프로젝트 이름 (Project name)
        description: 설명 및 승인/거절 이력 (Description, review notes appended)
        additional_notes: 추가 메모 (Additional notes)
        status: 상태 (ProjectStatus 값)
        estimated_cost: 예상 비용 (Set on approval/assignment)
        actual_cost: 실제 비용 (Set on completion)
        estimated_duration_hours: 예상 소요 시간 (Estimated hours)
        progress_percentage: 진행률 0-100 (Progress percentage)
        start_date: 작업 시작 일시 (First start of work)
        expected_completion_date: 완료 예정 일시 (Expected completion)
        completion_date: 완료 일시 (Actual completion)
    """

    __tablename__ = "projects"

    # 프로젝트 고유 식별자 — Project unique identifier
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    vehicle_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("vehicles.id", ondelete="RESTRICT"), nullable=False, index=True)
    employee_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    additional_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 상태 — Project status
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=ProjectStatus.PENDING.value)
    estimated_cost: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    actual_cost: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    estimated_duration_hours: Mapped[int | None] = mapped_column(Integer, nullable=True)
    progress_percentage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 일정 — Work dates (naive UTC)
    start_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    expected_completion_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    completion_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    customer = relationship("User", foreign_keys=[customer_id], lazy="selectin")
    vehicle = relationship("Vehicle", lazy="selectin")
    employee = relationship("User", foreign_keys=[employee_id], lazy="selectin")
