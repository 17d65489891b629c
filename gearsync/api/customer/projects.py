"""고객 프로젝트 라우터 — 맞춤 작업 요청.

Customer Project Router — Request, view, edit and withdraw custom
modification projects.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.api.deps import require_customer
from gearsync.database import get_db
from gearsync.models.user import User
from gearsync.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from gearsync.services.project_service import project_service

router: APIRouter = APIRouter()


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    data: ProjectCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> ProjectResponse:
    """프로젝트 요청 — PENDING 상태로 생성.

    Request a project for one of the caller's vehicles. It starts PENDING
    until an admin reviews it.
    """
    result: ProjectResponse = await project_service.create_project(db, current_user, data)
    await db.commit()
    return result


@router.get("", response_model=list[ProjectResponse])
async def list_my_projects(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> list[ProjectResponse]:
    return await project_service.list_my_projects(db, current_user)


@router.get("/active", response_model=list[ProjectResponse])
async def list_my_active_projects(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> list[ProjectResponse]:
    """진행 중 프로젝트 (Projects not yet completed, rejected or cancelled)."""
    return await project_service.list_my_projects(db, current_user, active_only=True)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_my_project(
    project_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> ProjectResponse:
    return await project_service.get_my_project(db, current_user, project_id)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    data: ProjectUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> ProjectResponse:
    """프로젝트 수정 — PENDING 상태만 (Only while PENDING)."""
    result: ProjectResponse = await project_service.update_project(db, current_user, project_id, data)
    await db.commit()
    return result


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> None:
    await project_service.delete_project(db, current_user, project_id)
    await db.commit()
