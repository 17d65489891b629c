"""직원 작업 라우터 — 배정된 예약/프로젝트 조회 및 진행 상태 변경.

Employee Work Router — View assigned appointments and projects and
report their progress.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.api.deps import require_staff
from gearsync.database import get_db
from gearsync.models.user import User
from gearsync.schemas.appointment import AppointmentResponse, AppointmentStatusUpdate
from gearsync.schemas.project import ProjectResponse, ProjectStatusUpdate
from gearsync.services.work_service import work_service

router: APIRouter = APIRouter()


@router.get("/appointments", response_model=list[AppointmentResponse])
async def list_my_appointments(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_staff)],
) -> list[AppointmentResponse]:
    """내게 배정된 예약 (Appointments assigned to me)."""
    return await work_service.list_my_appointments(db, current_user)


@router.get("/appointments/{appointment_id}", response_model=AppointmentResponse)
async def get_my_appointment(
    appointment_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_staff)],
) -> AppointmentResponse:
    return await work_service.get_my_appointment(db, current_user, appointment_id)


@router.patch("/appointments/{appointment_id}/status", response_model=AppointmentResponse)
async def update_appointment_status(
    appointment_id: UUID,
    data: AppointmentStatusUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_staff)],
) -> AppointmentResponse:
    """예약 진행 상태 변경.

    Move an assigned appointment through its work states, update the
    progress percentage or append a work note. Starting records the
    actual start time; completing records the end time.
    """
    result: AppointmentResponse = await work_service.update_appointment_progress(
        db, current_user, appointment_id, data
    )
    await db.commit()
    return result


@router.get("/projects", response_model=list[ProjectResponse])
async def list_my_projects(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_staff)],
) -> list[ProjectResponse]:
    """내게 배정된 프로젝트 (Projects assigned to me)."""
    return await work_service.list_my_projects(db, current_user)


@router.get("/projects/{project_id}", response_model=ProjectResponse)
async def get_my_project(
    project_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_staff)],
) -> ProjectResponse:
    return await work_service.get_my_project(db, current_user, project_id)


@router.patch("/projects/{project_id}/status", response_model=ProjectResponse)
async def update_project_status(
    project_id: UUID,
    data: ProjectStatusUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_staff)],
) -> ProjectResponse:
    """프로젝트 진행 상태 변경 (Report project progress or actual cost)."""
    result: ProjectResponse = await work_service.update_project_progress(db, current_user, project_id, data)
    await db.commit()
    return result
