"""관리자 프로젝트 라우터 — 승인, 반려, 직원 배정.

Admin Project Router — Project review (approve/reject) and employee
assignment endpoints.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.api.deps import require_admin
from gearsync.database import get_db
from gearsync.models.user import User
from gearsync.schemas.project import (
    ProjectApproveRequest,
    ProjectAssignRequest,
    ProjectRejectRequest,
    ProjectResponse,
)
from gearsync.services.admin_service import admin_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[ProjectResponse]:
    """전체 프로젝트 목록 (All projects, newest first)."""
    return await admin_service.list_projects(db)


@router.get("/filter", response_model=list[ProjectResponse])
async def filter_projects(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    status: Annotated[str, Query(description="프로젝트 상태 (Project status)")],
) -> list[ProjectResponse]:
    """상태별 프로젝트 목록 (Projects with the given status)."""
    return await admin_service.list_projects(db, status)


@router.get("/pending", response_model=list[ProjectResponse])
async def list_pending_projects(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[ProjectResponse]:
    """승인 대기 프로젝트 (Projects awaiting review)."""
    return await admin_service.list_pending_projects(db)


@router.put("/{project_id}/approve", response_model=ProjectResponse)
async def approve_project(
    project_id: UUID,
    data: ProjectApproveRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    background_tasks: BackgroundTasks,
    current_user: Annotated[User, Depends(require_admin)],
) -> ProjectResponse:
    """프로젝트 승인.

    Approve a PENDING project, optionally setting the estimate and
    assigning an employee. The customer is notified by email.
    """
    result: ProjectResponse = await admin_service.approve_project(
        db, current_user, project_id, data, background_tasks
    )
    await db.commit()
    return result


@router.put("/{project_id}/reject", response_model=ProjectResponse)
async def reject_project(
    project_id: UUID,
    data: ProjectRejectRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    background_tasks: BackgroundTasks,
    current_user: Annotated[User, Depends(require_admin)],
) -> ProjectResponse:
    """프로젝트 반려 (Reject a PENDING project with a reason)."""
    result: ProjectResponse = await admin_service.reject_project(
        db, current_user, project_id, data, background_tasks
    )
    await db.commit()
    return result


@router.put("/{project_id}/assign", response_model=ProjectResponse)
async def assign_project(
    project_id: UUID,
    data: ProjectAssignRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ProjectResponse:
    """프로젝트 직원 배정 (Assign or reassign an employee)."""
    result: ProjectResponse = await admin_service.assign_project(db, current_user, project_id, data)
    await db.commit()
    return result


@router.delete("/{project_id}/unassign", response_model=ProjectResponse)
async def unassign_project(
    project_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ProjectResponse:
    """프로젝트 배정 해제 (Remove the assigned employee)."""
    result: ProjectResponse = await admin_service.unassign_project(db, current_user, project_id)
    await db.commit()
    return result
