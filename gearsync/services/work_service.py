"""직원 업무 서비스 — 배정된 예약/프로젝트 조회 및 진행 상태 전이.

Work Service — Employee view of assigned appointments and projects and
their progress transitions.

Appointment transitions:
    CONFIRMED/RESCHEDULED → IN_PROGRESS (실제 시작 시각 기록)
    CONFIRMED/RESCHEDULED → NO_SHOW
    IN_PROGRESS → COMPLETED (실제 종료 시각, 진행률 100)

Project transitions:
    APPROVED/ON_HOLD → IN_PROGRESS (최초 시작일 기록)
    IN_PROGRESS → ON_HOLD
    IN_PROGRESS → COMPLETED (완료일, 진행률 100, 실제 비용)
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.models.appointment import Appointment, AppointmentStatus
from gearsync.models.project import Project, ProjectStatus
from gearsync.models.user import User
from gearsync.repositories.appointment_repository import appointment_repository
from gearsync.repositories.project_repository import project_repository
from gearsync.schemas.appointment import AppointmentResponse, AppointmentStatusUpdate
from gearsync.schemas.project import ProjectResponse, ProjectStatusUpdate
from gearsync.services.appointment_service import appointment_service
from gearsync.services.project_service import project_service
from gearsync.utils.clock import utcnow
from gearsync.utils.exceptions import BadRequestError, ForbiddenError, InvalidStateError
from gearsync.utils.notes import append_note

_A = AppointmentStatus
_P = ProjectStatus

# 허용된 예약 상태 전이 — Allowed appointment transitions (from → to)
_APPOINTMENT_TRANSITIONS: dict[str, set[str]] = {
    _A.CONFIRMED.value: {_A.IN_PROGRESS.value, _A.NO_SHOW.value},
    _A.RESCHEDULED.value: {_A.IN_PROGRESS.value, _A.NO_SHOW.value},
    _A.IN_PROGRESS.value: {_A.COMPLETED.value},
}

# 허용된 프로젝트 상태 전이 — Allowed project transitions (from → to)
_PROJECT_TRANSITIONS: dict[str, set[str]] = {
    _P.APPROVED.value: {_P.IN_PROGRESS.value},
    _P.ON_HOLD.value: {_P.IN_PROGRESS.value},
    _P.IN_PROGRESS.value: {_P.ON_HOLD.value, _P.COMPLETED.value},
}


class WorkService:
    """직원 업무 비즈니스 로직 (Employee work business logic)."""

    async def _get_assigned_appointment(self, db: AsyncSession, employee: User, appointment_id: UUID) -> Appointment:
        appointment: Appointment = await appointment_service.get_or_404(db, appointment_id)
        if appointment.employee_id != employee.id:
            raise ForbiddenError("This appointment is not assigned to you")
        return appointment

    async def _get_assigned_project(self, db: AsyncSession, employee: User, project_id: UUID) -> Project:
        project: Project = await project_service.get_or_404(db, project_id)
        if project.employee_id != employee.id:
            raise ForbiddenError("This project is not assigned to you")
        return project

    async def list_my_appointments(self, db: AsyncSession, employee: User) -> list[AppointmentResponse]:
        """내게 배정된 예약 목록 (Appointments assigned to the caller)."""
        appointments: list[Appointment] = await appointment_repository.list_by_employee(db, employee.id)
        return [appointment_service.to_response(a) for a in appointments]

    async def get_my_appointment(self, db: AsyncSession, employee: User, appointment_id: UUID) -> AppointmentResponse:
        """내게 배정된 예약 상세 (One assigned appointment)."""
        return appointment_service.to_response(await self._get_assigned_appointment(db, employee, appointment_id))

    async def update_appointment_progress(
        self,
        db: AsyncSession,
        employee: User,
        appointment_id: UUID,
        data: AppointmentStatusUpdate,
    ) -> AppointmentResponse:
        """배정된 예약의 진행 상태를 변경합니다.

        Move an assigned appointment through its work states, or update
        progress and notes without a status change (IN_PROGRESS only).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            employee: 배정 직원 (Assigned employee)
            appointment_id: 예약 ID (Appointment UUID)
            data: 상태/진행률/메모 (Status, progress and notes)

        Returns:
            AppointmentResponse: 변경된 예약 (Updated appointment)

        Raises:
            ForbiddenError: 배정되지 않은 예약 (Not assigned to the caller)
            InvalidStateError: 허용되지 않은 상태 전이 (Illegal transition)
            BadRequestError: 변경할 내용 없음 (Nothing to change)
        """
        appointment: Appointment = await self._get_assigned_appointment(db, employee, appointment_id)
        if data.status is None and data.progress_percentage is None and not data.employee_notes:
            raise BadRequestError("No valid fields provided for update")

        if data.status is not None:
            target: str = data.status.value
            if target not in _APPOINTMENT_TRANSITIONS.get(appointment.status, set()):
                raise InvalidStateError(f"Cannot change appointment status from {appointment.status} to {target}")
            appointment.status = target
            if target == _A.IN_PROGRESS.value:
                appointment.actual_start_time = utcnow()
            elif target == _A.COMPLETED.value:
                appointment.actual_end_time = utcnow()
                appointment.progress_percentage = 100

        if data.progress_percentage is not None and appointment.status != _A.COMPLETED.value:
            if appointment.status != _A.IN_PROGRESS.value:
                raise InvalidStateError("Progress can only be updated while the appointment is IN_PROGRESS")
            appointment.progress_percentage = data.progress_percentage

        if data.employee_notes and data.employee_notes.strip():
            appointment.employee_notes = append_note(appointment.employee_notes, employee.full_name, data.employee_notes)

        appointment = await appointment_repository.save(db, appointment)
        return appointment_service.to_response(appointment)

    async def list_my_projects(self, db: AsyncSession, employee: User) -> list[ProjectResponse]:
        """내게 배정된 프로젝트 목록 (Projects assigned to the caller)."""
        projects: list[Project] = await project_repository.list_projects(db, employee_id=employee.id)
        return [project_service.to_response(p) for p in projects]

    async def get_my_project(self, db: AsyncSession, employee: User, project_id: UUID) -> ProjectResponse:
        """내게 배정된 프로젝트 상세 (One assigned project)."""
        return project_service.to_response(await self._get_assigned_project(db, employee, project_id))

    async def update_project_progress(
        self,
        db: AsyncSession,
        employee: User,
        project_id: UUID,
        data: ProjectStatusUpdate,
    ) -> ProjectResponse:
        """배정된 프로젝트의 진행 상태를 변경합니다.

        Move an assigned project through its work states, or update its
        progress while IN_PROGRESS.

        Raises:
            ForbiddenError: 배정되지 않은 프로젝트 (Not assigned to the caller)
            InvalidStateError: 허용되지 않은 상태 전이 (Illegal transition)
        """
        project: Project = await self._get_assigned_project(db, employee, project_id)
        if data.status is None and data.progress_percentage is None:
            raise BadRequestError("No valid fields provided for update")

        if data.status is not None:
            target: str = data.status.value
            if target not in _PROJECT_TRANSITIONS.get(project.status, set()):
                raise InvalidStateError(f"Cannot change project status from {project.status} to {target}")
            project.status = target
            if target == _P.IN_PROGRESS.value and project.start_date is None:
                project.start_date = utcnow()
            elif target == _P.COMPLETED.value:
                project.completion_date = utcnow()
                project.progress_percentage = 100
                if data.actual_cost is not None:
                    project.actual_cost = data.actual_cost

        if data.progress_percentage is not None and project.status != _P.COMPLETED.value:
            if project.status != _P.IN_PROGRESS.value:
                raise InvalidStateError("Progress can only be updated while the project is IN_PROGRESS")
            project.progress_percentage = data.progress_percentage

        project = await project_repository.save(db, project)
        return project_service.to_response(project)


# 싱글턴 인스턴스 — Singleton instance
work_service: WorkService = WorkService()
