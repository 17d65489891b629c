"""서비스 카탈로그 관련 Pydantic 요청/응답 스키마 정의.

Service catalog Pydantic request/response schema definitions.
"""

from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field

from gearsync.models.catalog import ServiceCategory


class ServiceCreate(BaseModel):
    """서비스 생성 요청 스키마.

    Catalog item creation request schema.

    Attributes:
        name: 서비스 이름 (Unique name)
        description: 설명 (Description, optional)
        base_price: 기본 가격 (Base price, >= 0)
        estimated_duration_minutes: 예상 소요 시간(분) (Estimated minutes, > 0)
        category: 분류 (Category)
    """

    name: str = Field(min_length=1, max_length=150)
    description: str | None = None
    base_price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    estimated_duration_minutes: int = Field(gt=0)
    category: ServiceCategory = ServiceCategory.OTHER


class ServiceUpdate(BaseModel):
    """서비스 수정 요청 스키마 (부분 업데이트)."""

    name: str | None = Field(default=None, min_length=1, max_length=150)
    description: str | None = None
    base_price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    estimated_duration_minutes: int | None = Field(default=None, gt=0)
    category: ServiceCategory | None = None
    is_active: bool | None = None  # 활성 상태 변경 (Re-activate or deactivate)


class ServiceResponse(BaseModel):
    """서비스 응답 스키마 (Catalog item response)."""

    id: str
    name: str
    description: str | None
    base_price: Decimal
    estimated_duration_minutes: int
    category: str
    is_active: bool
    created_at: datetime


class ServiceSummary(BaseModel):
    """예약에 포함된 서비스 요약 (Service line shown inside an appointment)."""

    id: str
    name: str
    base_price: Decimal
    estimated_duration_minutes: int
