"""고객 대시보드 라우터 (Customer dashboard router)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.api.deps import require_customer
from gearsync.database import get_db
from gearsync.models.user import User
from gearsync.schemas.appointment import AppointmentResponse
from gearsync.schemas.common import AmountResponse, CountResponse
from gearsync.services.dashboard_service import customer_dashboard_service

router: APIRouter = APIRouter()


@router.get("/appointment/count", response_model=CountResponse)
async def get_appointment_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> CountResponse:
    """내 예약 수 (My appointment count)."""
    return CountResponse(count=await customer_dashboard_service.appointment_count(db, current_user))


@router.get("/appointments/active/count", response_model=CountResponse)
async def get_active_appointment_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> CountResponse:
    """진행 중 예약 수 (Scheduled, confirmed, rescheduled or in progress)."""
    return CountResponse(count=await customer_dashboard_service.active_appointment_count(db, current_user))


@router.get("/services/completed/count", response_model=CountResponse)
async def get_completed_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> CountResponse:
    return CountResponse(count=await customer_dashboard_service.completed_count(db, current_user))


@router.get("/vehicles/count", response_model=CountResponse)
async def get_vehicle_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> CountResponse:
    return CountResponse(count=await customer_dashboard_service.vehicle_count(db, current_user))


@router.get("/spent/total", response_model=AmountResponse)
async def get_total_spent(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> AmountResponse:
    """누적 결제 금액 (Sum of final costs over my completed appointments)."""
    return AmountResponse(amount=await customer_dashboard_service.total_spent(db, current_user))


@router.get("/appointments/upcoming", response_model=list[AppointmentResponse])
async def get_upcoming_appointments(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> list[AppointmentResponse]:
    """다가오는 예약 (Future appointments, soonest first)."""
    return await customer_dashboard_service.upcoming_appointments(db, current_user)
