"""관리자 고객/차량 조회 라우터 (Admin customer and vehicle lookup router)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.api.deps import require_admin
from gearsync.database import get_db
from gearsync.models.user import User
from gearsync.schemas.user import CustomerSummaryResponse
from gearsync.schemas.vehicle import VehicleResponse
from gearsync.services.admin_service import admin_service
from gearsync.services.vehicle_service import vehicle_service

router: APIRouter = APIRouter()


@router.get("/vehicles", response_model=list[VehicleResponse])
async def list_vehicles(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[VehicleResponse]:
    """전체 차량 목록 (Every registered vehicle with its owner)."""
    return await vehicle_service.list_all_vehicles(db)


@router.get("/customers", response_model=list[CustomerSummaryResponse])
async def list_customers(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[CustomerSummaryResponse]:
    """고객 목록 — 차량 및 건수 요약 포함."""
    return await admin_service.list_customers(db)


@router.get("/customers/{customer_id}", response_model=CustomerSummaryResponse)
async def get_customer(
    customer_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> CustomerSummaryResponse:
    return await admin_service.get_customer(db, customer_id)
