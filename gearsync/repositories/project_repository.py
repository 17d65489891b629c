"""프로젝트 레포지토리 — 고객/직원/상태별 프로젝트 쿼리.

Project Repository — Customer, employee and status scoped project queries.
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.models.project import Project
from gearsync.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """프로젝트 테이블 레포지토리 (Repository for the projects table)."""

    def __init__(self) -> None:
        super().__init__(Project)

    async def list_projects(
        self,
        db: AsyncSession,
        customer_id: UUID | None = None,
        employee_id: UUID | None = None,
        statuses: Sequence[str] | None = None,
    ) -> list[Project]:
        """조건에 맞는 프로젝트 목록을 최신순으로 조회합니다.

        List projects, newest first, filtered by customer, assigned employee
        and status when given.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            customer_id: 요청 고객 필터 (Requesting customer filter)
            employee_id: 배정 직원 필터 (Assigned employee filter)
            statuses: 상태 필터 (Status values to include)

        Returns:
            list[Project]: 프로젝트 목록 (List of projects)
        """
        query: Select = select(Project)
        if customer_id is not None:
            query = query.where(Project.customer_id == customer_id)
        if employee_id is not None:
            query = query.where(Project.employee_id == employee_id)
        if statuses is not None:
            query = query.where(Project.status.in_(list(statuses)))
        result = await db.execute(query.order_by(Project.created_at.desc()))
        return list(result.scalars().all())

    async def count_for_employee(
        self,
        db: AsyncSession,
        employee_id: UUID,
        statuses: Sequence[str] | None = None,
    ) -> int:
        """직원별 배정 프로젝트 수 (Assigned project count, optionally by status)."""
        query: Select = select(func.count()).select_from(Project).where(Project.employee_id == employee_id)
        if statuses is not None:
            query = query.where(Project.status.in_(list(statuses)))
        return (await db.execute(query)).scalar() or 0


# 싱글턴 인스턴스 — Singleton instance
project_repository: ProjectRepository = ProjectRepository()
