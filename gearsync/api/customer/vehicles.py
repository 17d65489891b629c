"""고객 차량 라우터 (Customer vehicle router)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.api.deps import require_customer
from gearsync.database import get_db
from gearsync.models.user import User
from gearsync.schemas.vehicle import VehicleCreate, VehicleResponse, VehicleUpdate
from gearsync.services.vehicle_service import vehicle_service

router: APIRouter = APIRouter()


@router.post("", response_model=VehicleResponse, status_code=201)
async def create_vehicle(
    data: VehicleCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> VehicleResponse:
    """차량 등록 (Register a vehicle; registration numbers are unique)."""
    result: VehicleResponse = await vehicle_service.create_vehicle(db, current_user, data)
    await db.commit()
    return result


@router.get("", response_model=list[VehicleResponse])
async def list_my_vehicles(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> list[VehicleResponse]:
    return await vehicle_service.list_my_vehicles(db, current_user)


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(
    vehicle_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> VehicleResponse:
    return await vehicle_service.get_vehicle(db, current_user, vehicle_id)


@router.put("/{vehicle_id}", response_model=VehicleResponse)
async def update_vehicle(
    vehicle_id: UUID,
    data: VehicleUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> VehicleResponse:
    result: VehicleResponse = await vehicle_service.update_vehicle(db, current_user, vehicle_id, data)
    await db.commit()
    return result


@router.delete("/{vehicle_id}", status_code=204)
async def delete_vehicle(
    vehicle_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> None:
    """차량 삭제 — 작업 이력이 없는 경우만.

    Delete a vehicle that has no appointments or projects.
    """
    await vehicle_service.delete_vehicle(db, current_user, vehicle_id)
    await db.commit()
