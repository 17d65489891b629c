"""관리자 직원 라우터 — 직원/관리자 계정 생성 및 관리.

Admin Staff Router — Provision employee and admin accounts, list and
update staff records.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.api.deps import require_admin
from gearsync.database import get_db
from gearsync.models.user import User
from gearsync.schemas.user import (
    EmployeeDetailResponse,
    EmployeeUpdate,
    StaffCreateRequest,
    UserResponse,
)
from gearsync.services.admin_service import admin_service

router: APIRouter = APIRouter()


@router.post("/employees", response_model=UserResponse, status_code=201)
async def create_employee(
    data: StaffCreateRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    background_tasks: BackgroundTasks,
    current_user: Annotated[User, Depends(require_admin)],
) -> UserResponse:
    """직원 계정을 생성합니다.

    Create an employee account. A temporary password is generated and
    emailed to the new employee.
    """
    result: UserResponse = await admin_service.create_employee(db, current_user, data, background_tasks)
    await db.commit()
    return result


@router.post("/admins", response_model=UserResponse, status_code=201)
async def create_admin(
    data: StaffCreateRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    background_tasks: BackgroundTasks,
    current_user: Annotated[User, Depends(require_admin)],
) -> UserResponse:
    """관리자 계정 생성 (Create another admin account)."""
    result: UserResponse = await admin_service.create_admin(db, current_user, data, background_tasks)
    await db.commit()
    return result


@router.get("/employees", response_model=list[UserResponse])
async def list_employees(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[UserResponse]:
    """전체 직원 목록 (All employees, active or not)."""
    return await admin_service.list_employees(db)


@router.get("/employees/active", response_model=list[UserResponse])
async def list_active_employees(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[UserResponse]:
    """배정 가능한 활성 직원 목록 (Active employees available for assignment)."""
    return await admin_service.list_employees(db, active_only=True)


@router.get("/employees/{employee_id}", response_model=EmployeeDetailResponse)
async def get_employee(
    employee_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> EmployeeDetailResponse:
    """직원 상세 조회 — 배정/완료 건수 포함.

    Retrieve an employee with assignment and completion counts.
    """
    return await admin_service.get_employee(db, employee_id)


@router.put("/employees/{employee_id}", response_model=EmployeeDetailResponse)
async def update_employee(
    employee_id: UUID,
    data: EmployeeUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> EmployeeDetailResponse:
    """직원 정보 수정 (Update an employee's details or active flag)."""
    result: EmployeeDetailResponse = await admin_service.update_employee(db, current_user, employee_id, data)
    await db.commit()
    return result
