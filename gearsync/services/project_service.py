"""프로젝트 서비스 — 고객 프로젝트 요청 비즈니스 로직.

Project Service — Customer project request business logic.
Customers create requests that start as PENDING and may change or
withdraw them only until an admin reviews them.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.models.project import Project, ProjectStatus
from gearsync.models.user import User
from gearsync.repositories.project_repository import project_repository
from gearsync.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from gearsync.services.vehicle_service import vehicle_service
from gearsync.utils.exceptions import BadRequestError, ForbiddenError, InvalidStateError, NotFoundError

# 진행 중 프로젝트 상태 — Statuses shown as active to the customer
ACTIVE_PROJECT_STATUSES: tuple[str, ...] = (
    ProjectStatus.PENDING.value,
    ProjectStatus.APPROVED.value,
    ProjectStatus.IN_PROGRESS.value,
    ProjectStatus.ON_HOLD.value,
)


class ProjectService:
    """프로젝트 관련 비즈니스 로직을 처리하는 서비스.

    Service handling customer project business logic.
    """

    def to_response(self, project: Project) -> ProjectResponse:
        """프로젝트 모델을 응답 스키마로 변환합니다 (Convert a Project to its response)."""
        employee: User | None = project.employee
        return ProjectResponse(
            id=str(project.id),
            customer_id=str(project.customer_id),
            customer_name=project.customer.full_name,
            vehicle_id=str(project.vehicle_id),
            vehicle_registration=project.vehicle.registration_number,
            employee_id=str(employee.id) if employee else None,
            employee_name=employee.full_name if employee else None,
            name=project.name,
            description=project.description,
            additional_notes=project.additional_notes,
            status=project.status,
            estimated_cost=project.estimated_cost,
            actual_cost=project.actual_cost,
            estimated_duration_hours=project.estimated_duration_hours,
            progress_percentage=project.progress_percentage,
            start_date=project.start_date,
            expected_completion_date=project.expected_completion_date,
            completion_date=project.completion_date,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )

    async def get_or_404(self, db: AsyncSession, project_id: UUID) -> Project:
        """프로젝트 조회, 없으면 404 (Load a project or raise NotFoundError)."""
        project: Project | None = await project_repository.get_by_id(db, project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def _get_owned(self, db: AsyncSession, customer: User, project_id: UUID) -> Project:
        project: Project = await self.get_or_404(db, project_id)
        if project.customer_id != customer.id:
            raise ForbiddenError("You do not have access to this project")
        return project

    async def create_project(
        self,
        db: AsyncSession,
        customer: User,
        data: ProjectCreate,
    ) -> ProjectResponse:
        """프로젝트 요청을 생성합니다.

        Create a PENDING project request for one of the customer's vehicles.

        Raises:
            NotFoundError / ForbiddenError: 차량 없음 또는 타인 소유
        """
        vehicle = await vehicle_service.get_owned_vehicle(db, customer, data.vehicle_id)
        project: Project = Project(
            customer=customer,
            vehicle=vehicle,
            name=data.name.strip(),
            description=data.description,
            additional_notes=data.additional_notes,
            status=ProjectStatus.PENDING.value,
            progress_percentage=0,
        )
        project = await project_repository.save(db, project)
        return self.to_response(project)

    async def list_my_projects(
        self,
        db: AsyncSession,
        customer: User,
        active_only: bool = False,
    ) -> list[ProjectResponse]:
        """내 프로젝트 목록 (Customer's projects, optionally only active ones)."""
        projects: list[Project] = await project_repository.list_projects(
            db,
            customer_id=customer.id,
            statuses=ACTIVE_PROJECT_STATUSES if active_only else None,
        )
        return [self.to_response(p) for p in projects]

    async def get_my_project(self, db: AsyncSession, customer: User, project_id: UUID) -> ProjectResponse:
        """내 프로젝트 상세 (One of the customer's projects)."""
        return self.to_response(await self._get_owned(db, customer, project_id))

    async def update_project(
        self,
        db: AsyncSession,
        customer: User,
        project_id: UUID,
        data: ProjectUpdate,
    ) -> ProjectResponse:
        """프로젝트 요청을 수정합니다 (PENDING 상태에서만).

        Update a project request while it is still PENDING.

        Raises:
            InvalidStateError: 검토가 끝난 프로젝트 (Project no longer PENDING)
            BadRequestError: 변경할 필드 없음 (No effective field)
        """
        project: Project = await self._get_owned(db, customer, project_id)
        if project.status != ProjectStatus.PENDING.value:
            raise InvalidStateError(f"Can only update projects with PENDING status. Current status: {project.status}")

        changes: dict = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        if not changes:
            raise BadRequestError("No valid fields provided for update")

        if "vehicle_id" in changes:
            project.vehicle = await vehicle_service.get_owned_vehicle(db, customer, changes.pop("vehicle_id"))
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        for field, value in changes.items():
            setattr(project, field, value)

        project = await project_repository.save(db, project)
        return self.to_response(project)

    async def delete_project(self, db: AsyncSession, customer: User, project_id: UUID) -> None:
        """프로젝트 요청을 삭제합니다 (PENDING 상태에서만).

        Withdraw a project request while it is still PENDING.
        """
        project: Project = await self._get_owned(db, customer, project_id)
        if project.status != ProjectStatus.PENDING.value:
            raise InvalidStateError(f"Can only delete projects with PENDING status. Current status: {project.status}")
        await project_repository.delete(db, project)


# 싱글턴 인스턴스 — Singleton instance
project_service: ProjectService = ProjectService()
