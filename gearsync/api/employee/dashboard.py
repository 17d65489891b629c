"""직원 대시보드 라우터 (Employee dashboard router)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.api.deps import require_staff
from gearsync.database import get_db
from gearsync.models.user import User
from gearsync.schemas.common import CountResponse
from gearsync.services.dashboard_service import employee_dashboard_service

router: APIRouter = APIRouter()


@router.get("/assigned/appointment/count", response_model=CountResponse)
async def get_assigned_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_staff)],
) -> CountResponse:
    """배정된 예약 수 (Appointments assigned to me)."""
    return CountResponse(count=await employee_dashboard_service.assigned_count(db, current_user))


@router.get("/completed/appointment/count", response_model=CountResponse)
async def get_completed_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_staff)],
) -> CountResponse:
    return CountResponse(count=await employee_dashboard_service.completed_count(db, current_user))


@router.get("/ongoing/appointment/count", response_model=CountResponse)
async def get_ongoing_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_staff)],
) -> CountResponse:
    return CountResponse(count=await employee_dashboard_service.ongoing_count(db, current_user))
