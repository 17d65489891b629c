"""공개 서비스 카탈로그 라우터 (Public service catalog router, no authentication)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.database import get_db
from gearsync.schemas.catalog import ServiceResponse
from gearsync.services.catalog_service import catalog_service

router: APIRouter = APIRouter()


@router.get("/all", response_model=list[ServiceResponse])
async def list_bookable_services(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[ServiceResponse]:
    """예약 가능한 서비스 목록 (Active services, sorted by name)."""
    return await catalog_service.list_services(db, active_only=True)
