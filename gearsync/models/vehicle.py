"""차량 SQLAlchemy ORM 모델 정의.

Vehicle SQLAlchemy ORM model definition.

Tables:
    - vehicles: 고객 차량 (Customer-owned vehicles)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Integer, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gearsync.database import Base


class Vehicle(Base):
    """차량 모델 — 고객이 등록한 차량.

    Vehicle model — A vehicle registered by a customer.
    Registration numbers are stored upper-cased and are globally unique.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        owner_id: 소유 고객 FK (Owning customer foreign key)
        registration_number: 차량 번호 (Registration/plate number, unique)
        make: 제조사 (Manufacturer)
        model: 모델명 (Model name)
        year: 연식 (Model year)
        color: 색상 (Color, optional)
        vin: 차대번호 (Vehicle identification number, optional)
        mileage: 주행거리 (Odometer reading, optional)

    Relationships:
        owner: 소유 고객 (Owning customer)
    """

    __tablename__ = "vehicles"

    # 차량 고유 식별자 — Vehicle unique identifier
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소유자 FK — Owning customer (CASCADE: 사용자 삭제 시 차량도 삭제)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # 차량 번호 — Registration number (전역 고유)
    registration_number: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    make: Mapped[str] = mapped_column(String(100), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    color: Mapped[str | None] = mapped_column(String(50), nullable=True)
    vin: Mapped[str | None] = mapped_column(String(17), nullable=True)
    mileage: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    owner = relationship("User", lazy="selectin")
