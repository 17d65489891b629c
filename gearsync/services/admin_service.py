"""관리자 서비스 — 직원 관리, 예약/프로젝트 배정 및 상태 전이.

Admin Service — Staff provisioning, employee management, appointment and
project assignment with their status transitions, and cross-entity
summary queries for the admin screens.

Assignment rule (shared by appointments and projects):
    1. 요청자는 ADMIN (actor must be ADMIN)                         → 403
    2. 대상 엔티티 존재 (entity exists)                             → 404
    3. 현재 상태가 배정 가능 (entity status allows assignment)       → 409
    4. 직원 존재 (employee exists)                                  → 404
    5. 직원 역할 EMPLOYEE/ADMIN, 활성 상태 (employee role, active)  → 400
"""

from uuid import UUID

from fastapi import BackgroundTasks
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.models.appointment import Appointment, AppointmentStatus
from gearsync.models.project import ASSIGNABLE_PROJECT_STATUSES, Project, ProjectStatus
from gearsync.models.user import STAFF_ROLES, User, UserRole
from gearsync.repositories.appointment_repository import appointment_repository
from gearsync.repositories.project_repository import project_repository
from gearsync.repositories.user_repository import user_repository
from gearsync.repositories.vehicle_repository import vehicle_repository
from gearsync.schemas.appointment import AppointmentAssignRequest, AppointmentResponse
from gearsync.schemas.project import (
    ProjectApproveRequest,
    ProjectAssignRequest,
    ProjectRejectRequest,
    ProjectResponse,
)
from gearsync.schemas.user import (
    CustomerSummaryResponse,
    EmployeeDetailResponse,
    EmployeeUpdate,
    StaffCreateRequest,
    UserResponse,
)
from gearsync.services.appointment_service import appointment_service
from gearsync.services.auth_service import auth_service
from gearsync.services.email_service import email_service
from gearsync.services.project_service import project_service
from gearsync.services.vehicle_service import vehicle_service
from gearsync.utils.clock import to_naive_utc, utcnow
from gearsync.utils.exceptions import (
    BadRequestError,
    DuplicateError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from gearsync.utils.notes import append_note
from gearsync.utils.password import generate_temporary_password, hash_password

# 직원 배정 불가 예약 상태 — Appointment statuses that reject (re)assignment
_UNASSIGNABLE_APPOINTMENT_STATUSES: tuple[str, ...] = (
    AppointmentStatus.IN_PROGRESS.value,
    AppointmentStatus.COMPLETED.value,
    AppointmentStatus.CANCELLED.value,
    AppointmentStatus.NO_SHOW.value,
)

# 배정 해제 불가 예약 상태 — Appointment statuses that reject unassignment
_LOCKED_ASSIGNMENT_STATUSES: tuple[str, ...] = (
    AppointmentStatus.IN_PROGRESS.value,
    AppointmentStatus.COMPLETED.value,
)


def _parse_status(enum_cls: type, value: str) -> str:
    """상태 문자열을 검증합니다 (Validate a status filter value, 400 on unknown)."""
    try:
        return enum_cls(value.strip().upper()).value
    except ValueError:
        valid: str = ", ".join(s.value for s in enum_cls)
        raise BadRequestError(f"Invalid status: {value}. Valid values: {valid}")


class AdminService:
    """관리자 비즈니스 로직을 처리하는 서비스.

    Service handling admin business logic. Every mutating operation
    re-checks that the actor is an ADMIN, independently of the router
    dependency.
    """

    def _ensure_admin(self, actor: User) -> None:
        """요청자가 관리자인지 확인합니다 (Raise 403 unless the actor is an ADMIN)."""
        if actor.role != UserRole.ADMIN.value:
            raise ForbiddenError("Only administrators can perform this action")

    async def _get_assignable_employee(self, db: AsyncSession, employee_id: UUID) -> User:
        """배정 가능한 직원을 조회합니다.

        Load the target of an assignment and check it can take work.

        Raises:
            NotFoundError: 직원 없음 (Employee not found)
            BadRequestError: 직원 역할 아님 또는 비활성 (Not staff, or inactive)
        """
        employee: User | None = await user_repository.get_by_id(db, employee_id)
        if employee is None:
            raise NotFoundError("Employee not found")
        if employee.role not in STAFF_ROLES:
            raise BadRequestError("Selected user is not an employee")
        if not employee.is_active:
            raise BadRequestError("Cannot assign inactive employee")
        return employee

    # ------------------------------------------------------------------
    # 직원/관리자 계정 — Staff accounts
    # ------------------------------------------------------------------

    async def _provision_staff(
        self,
        db: AsyncSession,
        actor: User,
        data: StaffCreateRequest,
        role: UserRole,
        background_tasks: BackgroundTasks,
    ) -> UserResponse:
        """임시 비밀번호로 직원/관리자 계정을 생성합니다.

        Create an EMPLOYEE or ADMIN account with a generated temporary
        password, flag it for a password change on first login and email
        the credentials.

        Raises:
            ForbiddenError: 요청자가 관리자가 아님 (Actor is not an admin)
            DuplicateError: 이메일 중복 (Email already registered)
        """
        self._ensure_admin(actor)
        email: str = data.email.strip().lower()
        if await user_repository.get_by_email(db, email) is not None:
            raise DuplicateError("Email already registered")

        temporary_password: str = generate_temporary_password()
        user: User = await user_repository.create(
            db,
            {
                "email": email,
                "first_name": data.first_name.strip(),
                "last_name": data.last_name.strip(),
                "phone_number": data.phone_number,
                "role": role.value,
                "password_hash": hash_password(temporary_password),
                "is_active": True,
                "is_first_login": True,
                "is_password_changed": False,
            },
        )
        email_service.send_staff_credentials(background_tasks, user, temporary_password)
        return auth_service.to_user_response(user)

    async def create_employee(
        self, db: AsyncSession, actor: User, data: StaffCreateRequest, background_tasks: BackgroundTasks
    ) -> UserResponse:
        """직원 계정 생성 (Provision an EMPLOYEE account)."""
        return await self._provision_staff(db, actor, data, UserRole.EMPLOYEE, background_tasks)

    async def create_admin(
        self, db: AsyncSession, actor: User, data: StaffCreateRequest, background_tasks: BackgroundTasks
    ) -> UserResponse:
        """관리자 계정 생성 (Provision an ADMIN account)."""
        return await self._provision_staff(db, actor, data, UserRole.ADMIN, background_tasks)

    async def list_employees(self, db: AsyncSession, active_only: bool = False) -> list[UserResponse]:
        """직원 목록 (EMPLOYEE accounts, optionally only active ones)."""
        employees: list[User] = await user_repository.list_by_role(
            db, UserRole.EMPLOYEE.value, is_active=True if active_only else None
        )
        return [auth_service.to_user_response(e) for e in employees]

    async def _get_staff_or_404(self, db: AsyncSession, employee_id: UUID) -> User:
        employee: User | None = await user_repository.get_by_id(db, employee_id)
        if employee is None:
            raise NotFoundError("Employee not found")
        if employee.role not in STAFF_ROLES:
            raise BadRequestError("User is not an employee")
        return employee

    async def _employee_detail(self, db: AsyncSession, employee: User) -> EmployeeDetailResponse:
        completed_appointment = [AppointmentStatus.COMPLETED.value]
        completed_project = [ProjectStatus.COMPLETED.value]
        return EmployeeDetailResponse(
            **auth_service.to_user_response(employee).model_dump(),
            assigned_appointment_count=await appointment_repository.count_for_employee(db, employee.id),
            completed_appointment_count=await appointment_repository.count_for_employee(
                db, employee.id, completed_appointment
            ),
            assigned_project_count=await project_repository.count_for_employee(db, employee.id),
            completed_project_count=await project_repository.count_for_employee(
                db, employee.id, completed_project
            ),
        )

    async def get_employee(self, db: AsyncSession, employee_id: UUID) -> EmployeeDetailResponse:
        """직원 상세 — 업무 통계 포함 (Employee detail with workload counts)."""
        return await self._employee_detail(db, await self._get_staff_or_404(db, employee_id))

    async def update_employee(
        self,
        db: AsyncSession,
        actor: User,
        employee_id: UUID,
        data: EmployeeUpdate,
    ) -> EmployeeDetailResponse:
        """직원 정보를 수정합니다.

        Update an employee's name, phone number or active flag.
        An admin cannot deactivate their own account.
        """
        self._ensure_admin(actor)
        employee: User = await self._get_staff_or_404(db, employee_id)
        changes: dict = data.model_dump(exclude_unset=True)
        for field in ("first_name", "last_name", "is_active"):
            if field in changes and changes[field] is None:
                del changes[field]
        if changes.get("is_active") is False and employee.id == actor.id:
            raise BadRequestError("You cannot deactivate your own account")

        employee = await user_repository.update(db, employee, changes)
        return await self._employee_detail(db, employee)

    # ------------------------------------------------------------------
    # 예약 — Appointments
    # ------------------------------------------------------------------

    async def list_appointments(self, db: AsyncSession, status: str | None = None) -> list[AppointmentResponse]:
        """예약 목록, 선택적 상태 필터 (All appointments, optionally by status)."""
        statuses = [_parse_status(AppointmentStatus, status)] if status is not None else None
        appointments: list[Appointment] = await appointment_repository.list_all(db, statuses=statuses)
        return [appointment_service.to_response(a) for a in appointments]

    async def list_pending_appointments(self, db: AsyncSession) -> list[AppointmentResponse]:
        """미배정 예약 목록 (SCHEDULED appointments without an employee)."""
        appointments: list[Appointment] = await appointment_repository.list_all(
            db, statuses=[AppointmentStatus.SCHEDULED.value], unassigned_only=True
        )
        return [appointment_service.to_response(a) for a in appointments]

    async def assign_appointment(
        self,
        db: AsyncSession,
        actor: User,
        appointment_id: UUID,
        data: AppointmentAssignRequest,
        background_tasks: BackgroundTasks,
    ) -> AppointmentResponse:
        """예약에 직원을 (재)배정합니다.

        Assign or reassign an employee to an appointment. A SCHEDULED
        appointment becomes CONFIRMED. The final cost may be overridden and
        admin notes are appended to the employee notes. Exactly one
        confirmation email is sent to the customer.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            actor: 요청 관리자 (Acting admin)
            appointment_id: 예약 ID (Appointment UUID)
            data: 배정 요청 (Assignment request)

        Returns:
            AppointmentResponse: 배정된 예약 (Updated appointment)

        Raises:
            ForbiddenError: 관리자 아님 (Actor is not an admin)
            NotFoundError: 예약 또는 직원 없음 (Appointment or employee not found)
            InvalidStateError: 진행 중/완료/취소/노쇼 예약 (Appointment cannot take an assignment)
            BadRequestError: 직원이 아니거나 비활성 (Target is not an active employee)
        """
        self._ensure_admin(actor)
        appointment: Appointment = await appointment_service.get_or_404(db, appointment_id)
        if appointment.status in _UNASSIGNABLE_APPOINTMENT_STATUSES:
            raise InvalidStateError(f"Cannot assign employee to appointment with status {appointment.status}")
        employee: User = await self._get_assignable_employee(db, data.employee_id)

        appointment.employee = employee
        if appointment.status == AppointmentStatus.SCHEDULED.value:
            appointment.status = AppointmentStatus.CONFIRMED.value
        if data.final_cost is not None:
            appointment.final_cost = data.final_cost
        if data.admin_notes and data.admin_notes.strip():
            appointment.employee_notes = append_note(appointment.employee_notes, "Admin", data.admin_notes)

        appointment = await appointment_repository.save(db, appointment)
        email_service.send_appointment_confirmation(background_tasks, appointment)
        return appointment_service.to_response(appointment)

    async def unassign_appointment(
        self,
        db: AsyncSession,
        actor: User,
        appointment_id: UUID,
    ) -> AppointmentResponse:
        """예약의 직원 배정을 해제합니다.

        Remove the assigned employee. A CONFIRMED appointment reverts to
        SCHEDULED.

        Raises:
            InvalidStateError: 진행 중 또는 완료된 예약 (IN_PROGRESS or COMPLETED)
            BadRequestError: 배정된 직원 없음 (No employee assigned)
        """
        self._ensure_admin(actor)
        appointment: Appointment = await appointment_service.get_or_404(db, appointment_id)
        if appointment.status in _LOCKED_ASSIGNMENT_STATUSES:
            raise InvalidStateError(f"Cannot unassign employee from appointment with status {appointment.status}")
        if appointment.employee_id is None:
            raise BadRequestError("Appointment has no assigned employee")

        appointment.employee = None
        if appointment.status == AppointmentStatus.CONFIRMED.value:
            appointment.status = AppointmentStatus.SCHEDULED.value

        appointment = await appointment_repository.save(db, appointment)
        return appointment_service.to_response(appointment)

    # ------------------------------------------------------------------
    # 프로젝트 — Projects
    # ------------------------------------------------------------------

    async def list_projects(self, db: AsyncSession, status: str | None = None) -> list[ProjectResponse]:
        """프로젝트 목록, 선택적 상태 필터 (All projects, optionally by status)."""
        statuses = [_parse_status(ProjectStatus, status)] if status is not None else None
        projects: list[Project] = await project_repository.list_projects(db, statuses=statuses)
        return [project_service.to_response(p) for p in projects]

    async def list_pending_projects(self, db: AsyncSession) -> list[ProjectResponse]:
        """검토 대기 프로젝트 (Projects waiting for review)."""
        projects: list[Project] = await project_repository.list_projects(
            db, statuses=[ProjectStatus.PENDING.value]
        )
        return [project_service.to_response(p) for p in projects]

    async def approve_project(
        self,
        db: AsyncSession,
        actor: User,
        project_id: UUID,
        data: ProjectApproveRequest,
        background_tasks: BackgroundTasks,
    ) -> ProjectResponse:
        """프로젝트를 승인합니다.

        Approve a PENDING project: assign an employee, set the cost and
        duration estimate and optionally the expected completion date.
        Approval notes are appended to the description.

        Raises:
            InvalidStateError: PENDING 상태가 아님 (Project is not PENDING)
        """
        self._ensure_admin(actor)
        project: Project = await project_service.get_or_404(db, project_id)
        if project.status != ProjectStatus.PENDING.value:
            raise InvalidStateError(
                f"Can only approve projects with PENDING status. Current status: {project.status}"
            )
        employee: User = await self._get_assignable_employee(db, data.employee_id)

        project.employee = employee
        project.estimated_cost = data.estimated_cost
        project.estimated_duration_hours = data.estimated_duration_hours
        if data.expected_completion_date is not None:
            project.expected_completion_date = to_naive_utc(data.expected_completion_date)
        if data.approval_notes and data.approval_notes.strip():
            project.description = append_note(
                project.description, "Approved by Admin", data.approval_notes, separator="\n\n"
            )
        project.status = ProjectStatus.APPROVED.value

        project = await project_repository.save(db, project)
        email_service.send_project_approved(background_tasks, project)
        return project_service.to_response(project)

    async def reject_project(
        self,
        db: AsyncSession,
        actor: User,
        project_id: UUID,
        data: ProjectRejectRequest,
        background_tasks: BackgroundTasks,
    ) -> ProjectResponse:
        """프로젝트를 거절합니다.

        Reject a PENDING project; the reason is appended to the description.

        Raises:
            InvalidStateError: PENDING 상태가 아님 (Project is not PENDING)
        """
        self._ensure_admin(actor)
        project: Project = await project_service.get_or_404(db, project_id)
        if project.status != ProjectStatus.PENDING.value:
            raise InvalidStateError(
                f"Can only reject projects with PENDING status. Current status: {project.status}"
            )

        stamp: str = utcnow().strftime("%Y-%m-%d %H:%M")
        project.description = f"{project.description}\n\n[{stamp}] REJECTED by Admin\nReason: {data.reason.strip()}"
        project.status = ProjectStatus.REJECTED.value

        project = await project_repository.save(db, project)
        email_service.send_project_rejected(background_tasks, project, data.reason.strip())
        return project_service.to_response(project)

    async def assign_project(
        self,
        db: AsyncSession,
        actor: User,
        project_id: UUID,
        data: ProjectAssignRequest,
    ) -> ProjectResponse:
        """프로젝트에 직원을 (재)배정합니다.

        Assign or reassign an employee to an APPROVED, IN_PROGRESS or
        ON_HOLD project and replace its estimate.

        Raises:
            InvalidStateError: 배정 불가 상태 (Project status does not allow assignment)
        """
        self._ensure_admin(actor)
        project: Project = await project_service.get_or_404(db, project_id)
        if project.status not in ASSIGNABLE_PROJECT_STATUSES:
            raise InvalidStateError(
                f"Cannot assign employee to project with status {project.status}. "
                f"Allowed statuses: {', '.join(ASSIGNABLE_PROJECT_STATUSES)}"
            )
        employee: User = await self._get_assignable_employee(db, data.employee_id)

        project.employee = employee
        project.estimated_cost = data.estimated_cost
        project.estimated_duration_hours = data.estimated_duration_hours
        if data.admin_notes and data.admin_notes.strip():
            project.additional_notes = append_note(project.additional_notes, "Admin", data.admin_notes)

        project = await project_repository.save(db, project)
        return project_service.to_response(project)

    async def unassign_project(
        self,
        db: AsyncSession,
        actor: User,
        project_id: UUID,
    ) -> ProjectResponse:
        """프로젝트의 직원 배정을 해제합니다.

        Raises:
            InvalidStateError: 진행 중 프로젝트 (Project is IN_PROGRESS)
            BadRequestError: 배정된 직원 없음 (No employee assigned)
        """
        self._ensure_admin(actor)
        project: Project = await project_service.get_or_404(db, project_id)
        if project.status == ProjectStatus.IN_PROGRESS.value:
            raise InvalidStateError("Cannot unassign employee from a project that is IN_PROGRESS")
        if project.employee_id is None:
            raise BadRequestError("Project has no assigned employee")

        project.employee = None
        project = await project_repository.save(db, project)
        return project_service.to_response(project)

    # ------------------------------------------------------------------
    # 고객/차량 요약 — Customers and vehicles
    # ------------------------------------------------------------------

    async def _customer_summary(self, db: AsyncSession, customer: User) -> CustomerSummaryResponse:
        vehicles = await vehicle_repository.list_by_owner(db, customer.id)
        return CustomerSummaryResponse(
            **auth_service.to_user_response(customer).model_dump(),
            vehicles=[vehicle_service.to_response(v) for v in vehicles],
            vehicle_count=len(vehicles),
            appointment_count=await appointment_repository.count_for_customer(db, customer.id),
            project_count=len(await project_repository.list_projects(db, customer_id=customer.id)),
        )

    async def list_customers(self, db: AsyncSession) -> list[CustomerSummaryResponse]:
        """고객 목록 — 차량 및 이용 통계 포함 (Customers with vehicles and totals)."""
        customers: list[User] = await user_repository.list_by_role(db, UserRole.CUSTOMER.value)
        return [await self._customer_summary(db, c) for c in customers]

    async def get_customer(self, db: AsyncSession, customer_id: UUID) -> CustomerSummaryResponse:
        """고객 상세 (Customer detail; the user must have role CUSTOMER)."""
        customer: User | None = await user_repository.get_by_id(db, customer_id)
        if customer is None or customer.role != UserRole.CUSTOMER.value:
            raise NotFoundError("Customer not found")
        return await self._customer_summary(db, customer)


# 싱글턴 인스턴스 — Singleton instance
admin_service: AdminService = AdminService()
