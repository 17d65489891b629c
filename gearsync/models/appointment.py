"""예약 SQLAlchemy ORM 모델 정의.

Appointment SQLAlchemy ORM model definition.

Tables:
    - appointments: 정비 예약 (Service appointments with status workflow)

Status workflow:
    SCHEDULED → CONFIRMED (직원 배정, employee assigned)
    CONFIRMED → SCHEDULED (배정 해제, unassigned)
    CONFIRMED → RESCHEDULED (고객 일정 변경, customer reschedules)
    CONFIRMED/RESCHEDULED → IN_PROGRESS → COMPLETED (직원 작업, employee work)
    CONFIRMED/RESCHEDULED → NO_SHOW
    * → CANCELLED (고객 취소, customer cancel; not from COMPLETED)
"""

import enum
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy import String, Text, DateTime, Integer, Numeric, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gearsync.database import Base
from gearsync.models.catalog import appointment_services


class AppointmentStatus(str, enum.Enum):
    """예약 상태 (Appointment status)."""

    SCHEDULED = "SCHEDULED"
    CONFIRMED = "CONFIRMED"
    RESCHEDULED = "RESCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


# 종료 상태 — Terminal states excluded from the per-customer time slot check
TERMINAL_APPOINTMENT_STATUSES: tuple[str, ...] = (
    AppointmentStatus.COMPLETED.value,
    AppointmentStatus.CANCELLED.value,
)


class Appointment(Base):
    """예약 모델 — 고객 차량에 대한 서비스 예약.

    Appointment model — A booking of one or more catalog services for a
    customer's vehicle at a given time.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        customer_id: 예약 고객 FK (Booking customer)
        vehicle_id: 대상 차량 FK (Serviced vehicle)
        employee_id: 배정 직원 FK (Assigned employee, nullable)
        scheduled_date_time: 예약 일시, naive UTC (Scheduled time)
        status: 상태 (AppointmentStatus 값)
        estimated_cost: 예상 비용 (Sum of service base prices)
        final_cost: 최종 비용 (Final cost, defaults to estimated cost)
        estimated_duration_minutes: 예상 소요 시간(분) (Sum of service durations)
        customer_notes: 고객 메모 (Customer notes)
        employee_notes: 직원/관리자 메모 (Timestamped staff notes)
        progress_percentage: 진행률 0-100 (Progress percentage)
        actual_start_time: 실제 시작 일시 (Set when work starts)
        actual_end_time: 실제 종료 일시 (Set when work completes)

    Relationships:
        customer: 예약 고객 (Booking customer)
        vehicle: 대상 차량 (Serviced vehicle)
        employee: 배정 직원 (Assigned employee)
        services: 예약 서비스 목록 (Booked catalog services)
    """

    __tablename__ = "appointments"

    # 예약 고유 식별자 — Appointment unique identifier
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 고객 FK — Booking customer (CASCADE: 고객 삭제 시 예약도 삭제)
    customer_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # 차량 FK — Serviced vehicle (예약이 있는 차량은 삭제 불가)
    vehicle_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("vehicles.id", ondelete="RESTRICT"), nullable=False, index=True)
    # 배정 직원 FK — Assigned employee (SET NULL: 직원 삭제 시 미배정)
    employee_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    # 예약 일시 — Scheduled time (naive UTC)
    scheduled_date_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    # 상태 — Appointment status
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=AppointmentStatus.SCHEDULED.value)
    estimated_cost: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    final_cost: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    estimated_duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    customer_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    employee_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 진행률 — Progress percentage (0-100)
    progress_percentage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    actual_start_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    actual_end_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships (응답 생성에 필요하므로 selectin 로딩)
    customer = relationship("User", foreign_keys=[customer_id], lazy="selectin")
    vehicle = relationship("Vehicle", lazy="selectin")
    employee = relationship("User", foreign_keys=[employee_id], lazy="selectin")
    services = relationship("Service", secondary=appointment_services, lazy="selectin")
