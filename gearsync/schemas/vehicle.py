"""차량 관련 Pydantic 요청/응답 스키마 정의.

Vehicle Pydantic request/response schema definitions.
"""

from datetime import datetime
from pydantic import BaseModel, Field


class VehicleCreate(BaseModel):
    """차량 등록 요청 스키마.

    Vehicle registration request schema.

    Attributes:
        registration_number: 차량 번호 (Registration number, unique)
        make: 제조사 (Manufacturer)
        model: 모델명 (Model name)
        year: 연식 (Model year)
        color: 색상 (Color, optional)
        vin: 차대번호 (VIN, optional)
        mileage: 주행거리 (Odometer reading, optional)
    """

    registration_number: str = Field(min_length=1, max_length=20)
    make: str = Field(min_length=1, max_length=100)
    model: str = Field(min_length=1, max_length=100)
    year: int = Field(ge=1900, le=2100)
    color: str | None = Field(default=None, max_length=50)
    vin: str | None = Field(default=None, max_length=17)
    mileage: int | None = Field(default=None, ge=0)


class VehicleUpdate(BaseModel):
    """차량 수정 요청 스키마 (부분 업데이트)."""

    registration_number: str | None = Field(default=None, min_length=1, max_length=20)
    make: str | None = Field(default=None, min_length=1, max_length=100)
    model: str | None = Field(default=None, min_length=1, max_length=100)
    year: int | None = Field(default=None, ge=1900, le=2100)
    color: str | None = Field(default=None, max_length=50)
    vin: str | None = Field(default=None, max_length=17)
    mileage: int | None = Field(default=None, ge=0)


class VehicleResponse(BaseModel):
    """차량 응답 스키마 — 소유자 정보 포함.

    Vehicle response schema including owner information.
    """

    id: str  # 차량 UUID 문자열 (Vehicle UUID as string)
    registration_number: str
    make: str
    model: str
    year: int
    color: str | None
    vin: str | None
    mileage: int | None
    owner_id: str  # 소유 고객 UUID (Owner UUID)
    owner_name: str  # 소유 고객 이름 (Owner display name)
    owner_email: str
    created_at: datetime
