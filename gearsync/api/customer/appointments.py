"""고객 예약 라우터 — 예약 생성, 조회, 변경, 취소.

Customer Appointment Router — Book, view, reschedule, cancel and delete
the caller's own appointments.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.api.deps import require_customer
from gearsync.database import get_db
from gearsync.models.user import User
from gearsync.schemas.appointment import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentUpdate,
)
from gearsync.services.appointment_service import appointment_service

router: APIRouter = APIRouter()


@router.post("", response_model=AppointmentResponse, status_code=201)
async def book_appointment(
    data: AppointmentCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> AppointmentResponse:
    """예약 생성.

    Book an appointment for one of the caller's vehicles. Estimated cost
    and duration are summed from the selected services.
    """
    result: AppointmentResponse = await appointment_service.book_appointment(db, current_user, data)
    await db.commit()
    return result


@router.get("", response_model=list[AppointmentResponse])
async def list_my_appointments(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> list[AppointmentResponse]:
    """내 예약 목록 (My appointments, newest first)."""
    return await appointment_service.list_my_appointments(db, current_user)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_my_appointment(
    appointment_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> AppointmentResponse:
    return await appointment_service.get_my_appointment(db, current_user, appointment_id)


@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: UUID,
    data: AppointmentUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> AppointmentResponse:
    """예약 변경 — 일정, 서비스, 메모.

    Change schedule, services or notes. Rescheduling a CONFIRMED
    appointment marks it RESCHEDULED.
    """
    result: AppointmentResponse = await appointment_service.update_appointment(
        db, current_user, appointment_id, data
    )
    await db.commit()
    return result


@router.put("/{appointment_id}/cancel", response_model=AppointmentResponse)
async def cancel_appointment(
    appointment_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> AppointmentResponse:
    """예약 취소 (Cancel an appointment)."""
    result: AppointmentResponse = await appointment_service.cancel_appointment(db, current_user, appointment_id)
    await db.commit()
    return result


@router.delete("/{appointment_id}", status_code=204)
async def delete_appointment(
    appointment_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> None:
    """예약 삭제 — 작업 시작 전만 (SCHEDULED, CONFIRMED or RESCHEDULED only)."""
    await appointment_service.delete_appointment(db, current_user, appointment_id)
    await db.commit()
