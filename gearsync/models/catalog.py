"""서비스 카탈로그 SQLAlchemy ORM 모델 정의.

Service catalog SQLAlchemy ORM model definitions.
Catalog items are the bookable units of work an appointment is made of.

Tables:
    - services: 서비스 항목 (Bookable catalog items with price and duration)
    - appointment_services: 예약-서비스 연결 (Appointment ↔ service association)
"""

import enum
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy import Column, String, Text, Boolean, DateTime, Integer, Numeric, ForeignKey, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from gearsync.database import Base


class ServiceCategory(str, enum.Enum):
    """서비스 분류 (Catalog item category)."""

    MAINTENANCE = "MAINTENANCE"
    REPAIR = "REPAIR"
    INSPECTION = "INSPECTION"
    TIRE_SERVICE = "TIRE_SERVICE"
    ELECTRICAL = "ELECTRICAL"
    BODYWORK = "BODYWORK"
    DIAGNOSTIC = "DIAGNOSTIC"
    OTHER = "OTHER"


# 예약-서비스 다대다 연결 테이블 — Appointment ↔ service many-to-many table
appointment_services: Table = Table(
    "appointment_services",
    Base.metadata,
    Column("appointment_id", Uuid, ForeignKey("appointments.id", ondelete="CASCADE"), primary_key=True),
    Column("service_id", Uuid, ForeignKey("services.id", ondelete="RESTRICT"), primary_key=True),
)


class Service(Base):
    """서비스 모델 — 예약 가능한 정비 항목.

    Service model — A bookable catalog item.
    Deactivated services stay referenced by past appointments but can no
    longer be booked.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 서비스 이름 (Unique display name)
        description: 설명 (Description, optional)
        base_price: 기본 가격 (Base price, Numeric 10,2)
        estimated_duration_minutes: 예상 소요 시간(분) (Estimated minutes)
        category: 분류 (ServiceCategory 값)
        is_active: 활성 상태 (Bookable when True)
    """

    __tablename__ = "services"

    # 서비스 고유 식별자 — Service unique identifier
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 서비스 이름 — Unique name
    name: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 기본 가격 — Base price
    base_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    # 예상 소요 시간(분) — Estimated duration in minutes
    estimated_duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[str] = mapped_column(String(30), nullable=False, default=ServiceCategory.OTHER.value)
    # 활성 상태 — Whether the service can be booked
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
