"""관리자 대시보드 라우터 — 집계 API.

Admin Dashboard Router — Shop-wide counts, earnings and appointment
lists for the admin dashboard.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.api.deps import require_admin
from gearsync.database import get_db
from gearsync.models.user import User
from gearsync.schemas.appointment import AppointmentResponse
from gearsync.schemas.common import AmountResponse, CountResponse
from gearsync.services.dashboard_service import admin_dashboard_service

router: APIRouter = APIRouter()


@router.get("/user/count", response_model=CountResponse)
async def get_user_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> CountResponse:
    """전체 사용자 수 (Total number of users)."""
    return CountResponse(count=await admin_dashboard_service.user_count(db))


@router.get("/appointment/count", response_model=CountResponse)
async def get_appointment_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> CountResponse:
    """전체 예약 수 (Total number of appointments)."""
    return CountResponse(count=await admin_dashboard_service.appointment_count(db))


@router.get("/vehicle/count", response_model=CountResponse)
async def get_vehicle_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> CountResponse:
    return CountResponse(count=await admin_dashboard_service.vehicle_count(db))


@router.get("/earnings/total", response_model=AmountResponse)
async def get_total_earnings(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> AmountResponse:
    """완료 예약 매출 합계.

    Sum of final costs over COMPLETED appointments, 0 when there are none.
    """
    return AmountResponse(amount=await admin_dashboard_service.total_earnings(db))


@router.get("/services/active/count", response_model=CountResponse)
async def get_active_service_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> CountResponse:
    return CountResponse(count=await admin_dashboard_service.active_service_count(db))


@router.get("/appointments/in-progress/count", response_model=CountResponse)
async def get_in_progress_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> CountResponse:
    """진행 중 예약 수 (Appointments currently IN_PROGRESS)."""
    return CountResponse(count=await admin_dashboard_service.in_progress_count(db))


@router.get("/appointments/confirmed", response_model=list[AppointmentResponse])
async def get_confirmed_appointments(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[AppointmentResponse]:
    return await admin_dashboard_service.confirmed_appointments(db)


@router.get("/appointments/today", response_model=list[AppointmentResponse])
async def get_todays_appointments(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[AppointmentResponse]:
    """오늘 예약 목록 (Appointments scheduled for the current UTC day)."""
    return await admin_dashboard_service.todays_appointments(db)
