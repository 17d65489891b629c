"""관리자 서비스 카탈로그 라우터.

Admin Service Catalog Router — Create, list, update and deactivate
bookable services.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.api.deps import require_admin
from gearsync.database import get_db
from gearsync.models.user import User
from gearsync.schemas.catalog import ServiceCreate, ServiceResponse, ServiceUpdate
from gearsync.services.catalog_service import catalog_service

router: APIRouter = APIRouter()


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ServiceResponse:
    """서비스 등록 (Create a catalog service; names are unique)."""
    result: ServiceResponse = await catalog_service.create_service(db, data)
    await db.commit()
    return result


@router.get("", response_model=list[ServiceResponse])
async def list_services(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[ServiceResponse]:
    """전체 서비스 목록 — 비활성 포함 (All services, inactive included)."""
    return await catalog_service.list_services(db, active_only=False)


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: UUID,
    data: ServiceUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ServiceResponse:
    result: ServiceResponse = await catalog_service.update_service(db, service_id, data)
    await db.commit()
    return result


@router.delete("/{service_id}", status_code=204)
async def deactivate_service(
    service_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> None:
    """서비스 비활성화.

    Deactivate a service. The row is kept so existing appointments still
    reference it.
    """
    await catalog_service.deactivate_service(db, service_id)
    await db.commit()
