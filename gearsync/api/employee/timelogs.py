"""직원 작업 시간 라우터.

Employee Time Log Router — Record, list, correct and remove hours worked
on assigned appointments and projects.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.api.deps import require_staff
from gearsync.database import get_db
from gearsync.models.user import User
from gearsync.schemas.time_log import TimeLogCreate, TimeLogResponse, TimeLogUpdate
from gearsync.services.time_log_service import time_log_service

router: APIRouter = APIRouter()


@router.post("", response_model=TimeLogResponse, status_code=201)
async def create_time_log(
    data: TimeLogCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_staff)],
) -> TimeLogResponse:
    """작업 시간 기록.

    Log time against exactly one assigned appointment or project. Duration
    is computed from start and end in whole minutes.
    """
    result: TimeLogResponse = await time_log_service.create_time_log(db, current_user, data)
    await db.commit()
    return result


@router.get("", response_model=list[TimeLogResponse])
async def list_my_time_logs(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_staff)],
) -> list[TimeLogResponse]:
    """내 작업 시간 기록 (My time logs, newest first)."""
    return await time_log_service.list_my_time_logs(db, current_user)


@router.get("/appointment/{appointment_id}", response_model=list[TimeLogResponse])
async def list_appointment_time_logs(
    appointment_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_staff)],
) -> list[TimeLogResponse]:
    return await time_log_service.list_for_appointment(db, current_user, appointment_id)


@router.get("/project/{project_id}", response_model=list[TimeLogResponse])
async def list_project_time_logs(
    project_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_staff)],
) -> list[TimeLogResponse]:
    return await time_log_service.list_for_project(db, current_user, project_id)


@router.put("/{log_id}", response_model=TimeLogResponse)
async def update_time_log(
    log_id: UUID,
    data: TimeLogUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_staff)],
) -> TimeLogResponse:
    """작업 시간 수정 — 본인 기록만 (Own logs only)."""
    result: TimeLogResponse = await time_log_service.update_time_log(db, current_user, log_id, data)
    await db.commit()
    return result


@router.delete("/{log_id}", status_code=204)
async def delete_time_log(
    log_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_staff)],
) -> None:
    await time_log_service.delete_time_log(db, current_user, log_id)
    await db.commit()
