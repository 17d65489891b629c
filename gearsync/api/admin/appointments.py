"""관리자 예약 라우터 — 예약 조회 및 직원 배정.

Admin Appointment Router — Appointment listing, status filtering and
employee assignment endpoints.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.api.deps import require_admin
from gearsync.database import get_db
from gearsync.models.user import User
from gearsync.schemas.appointment import AppointmentAssignRequest, AppointmentResponse
from gearsync.services.admin_service import admin_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[AppointmentResponse])
async def list_appointments(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[AppointmentResponse]:
    """전체 예약 목록 (All appointments, by scheduled time)."""
    return await admin_service.list_appointments(db)


@router.get("/filter", response_model=list[AppointmentResponse])
async def filter_appointments(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    status: Annotated[str, Query(description="예약 상태 (Appointment status)")],
) -> list[AppointmentResponse]:
    """상태별 예약 목록.

    List appointments with the given status. Unknown status names are
    rejected with 400.
    """
    return await admin_service.list_appointments(db, status)


@router.get("/pending", response_model=list[AppointmentResponse])
async def list_pending_appointments(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[AppointmentResponse]:
    """배정 대기 예약 (SCHEDULED appointments without an employee)."""
    return await admin_service.list_pending_appointments(db)


@router.put("/{appointment_id}/assign", response_model=AppointmentResponse)
async def assign_appointment(
    appointment_id: UUID,
    data: AppointmentAssignRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    background_tasks: BackgroundTasks,
    current_user: Annotated[User, Depends(require_admin)],
) -> AppointmentResponse:
    """예약에 직원 배정.

    Assign an employee to an appointment. SCHEDULED becomes CONFIRMED and
    the customer receives a confirmation email.
    """
    result: AppointmentResponse = await admin_service.assign_appointment(
        db, current_user, appointment_id, data, background_tasks
    )
    await db.commit()
    return result


@router.put("/{appointment_id}/reassign", response_model=AppointmentResponse)
async def reassign_appointment(
    appointment_id: UUID,
    data: AppointmentAssignRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    background_tasks: BackgroundTasks,
    current_user: Annotated[User, Depends(require_admin)],
) -> AppointmentResponse:
    """예약 담당 직원 변경 (Replace the assigned employee)."""
    result: AppointmentResponse = await admin_service.assign_appointment(
        db, current_user, appointment_id, data, background_tasks
    )
    await db.commit()
    return result


@router.delete("/{appointment_id}/unassign", response_model=AppointmentResponse)
async def unassign_appointment(
    appointment_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> AppointmentResponse:
    """예약 배정 해제 — CONFIRMED는 SCHEDULED로 복귀.

    Remove the assigned employee. A CONFIRMED appointment reverts to
    SCHEDULED.
    """
    result: AppointmentResponse = await admin_service.unassign_appointment(db, current_user, appointment_id)
    await db.commit()
    return result
