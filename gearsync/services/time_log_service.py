"""작업 시간 서비스 — 직원 작업 시간 기록 비즈니스 로직.

Time Log Service — Business logic for employee time tracking.

Validation order (create):
    1. 요청자 역할 EMPLOYEE/ADMIN (actor is staff)                  → 403
    2. 예약/프로젝트 중 정확히 하나 (exactly one target)            → 400
    3. 종료 ≥ 시작, 종료가 미래 아님 (time window rules)             → 400
    4. 대상 존재 (target exists)                                    → 404
    5. 대상이 요청자에게 배정됨 (target assigned to actor)           → 403
    6. 예약 일시 ≤ 시작 시각 (appointment already started)           → 400
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.models.appointment import Appointment
from gearsync.models.project import Project
from gearsync.models.time_log import TimeLog
from gearsync.models.user import STAFF_ROLES, User
from gearsync.repositories.time_log_repository import time_log_repository
from gearsync.schemas.time_log import TimeLogCreate, TimeLogResponse, TimeLogUpdate
from gearsync.services.appointment_service import appointment_service
from gearsync.services.project_service import project_service
from gearsync.utils.clock import minutes_between, to_naive_utc, utcnow
from gearsync.utils.exceptions import BadRequestError, ForbiddenError, NotFoundError


class TimeLogService:
    """작업 시간 비즈니스 로직 (Time log business logic)."""

    def to_response(self, log: TimeLog) -> TimeLogResponse:
        """작업 시간 모델을 응답 스키마로 변환합니다 (Convert a TimeLog to its response)."""
        return TimeLogResponse(
            id=str(log.id),
            employee_id=str(log.employee_id),
            employee_name=log.employee.full_name,
            appointment_id=str(log.appointment_id) if log.appointment_id else None,
            project_id=str(log.project_id) if log.project_id else None,
            start_time=log.start_time,
            end_time=log.end_time,
            duration_minutes=log.duration_minutes,
            work_description=log.work_description,
            notes=log.notes,
            created_at=log.created_at,
        )

    def _ensure_staff(self, actor: User) -> None:
        if actor.role not in STAFF_ROLES:
            raise ForbiddenError("Only employees can log time")

    def _validate_window(self, start: datetime, end: datetime) -> None:
        """작업 구간 규칙 검사 (End not before start, end not in the future)."""
        if end < start:
            raise BadRequestError("End time must be after start time")
        if end > utcnow():
            raise BadRequestError("End time cannot be in the future")

    def _validate_appointment_started(self, appointment: Appointment, start: datetime) -> None:
        if appointment.scheduled_date_time > start:
            raise BadRequestError("Cannot log time for an appointment that has not yet occurred")

    async def _get_assigned_appointment(self, db: AsyncSession, actor: User, appointment_id: UUID) -> Appointment:
        appointment: Appointment = await appointment_service.get_or_404(db, appointment_id)
        if appointment.employee_id != actor.id:
            raise ForbiddenError("You are not assigned to this appointment")
        return appointment

    async def _get_assigned_project(self, db: AsyncSession, actor: User, project_id: UUID) -> Project:
        project: Project = await project_service.get_or_404(db, project_id)
        if project.employee_id != actor.id:
            raise ForbiddenError("You are not assigned to this project")
        return project

    async def _get_own_log(self, db: AsyncSession, actor: User, log_id: UUID) -> TimeLog:
        log: TimeLog | None = await time_log_repository.get_by_id(db, log_id)
        if log is None:
            raise NotFoundError("Time log not found")
        if log.employee_id != actor.id:
            raise ForbiddenError("You can only modify your own time logs")
        return log

    async def create_time_log(
        self,
        db: AsyncSession,
        actor: User,
        data: TimeLogCreate,
    ) -> TimeLogResponse:
        """작업 시간을 기록합니다.

        Log a work interval against one assigned appointment or project.
        Duration is computed from start and end.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            actor: 기록 직원 (Logging employee)
            data: 작업 시간 요청 (Time log request)

        Returns:
            TimeLogResponse: 생성된 기록 (Created time log)

        Raises:
            ForbiddenError: 직원 아님 또는 미배정 대상 (Not staff, or not the assignee)
            BadRequestError: 대상 지정 오류 또는 시간 규칙 위반 (Target or time rule violation)
            NotFoundError: 대상 없음 (Appointment or project not found)
        """
        self._ensure_staff(actor)
        if (data.appointment_id is None) == (data.project_id is None):
            raise BadRequestError("Exactly one of appointment_id or project_id must be provided")

        start: datetime = to_naive_utc(data.start_time)
        end: datetime = to_naive_utc(data.end_time)
        self._validate_window(start, end)

        values: dict = {
            "employee_id": actor.id,
            "start_time": start,
            "end_time": end,
            "duration_minutes": minutes_between(start, end),
            "work_description": data.work_description.strip(),
            "notes": data.notes,
        }
        if data.appointment_id is not None:
            appointment: Appointment = await self._get_assigned_appointment(db, actor, data.appointment_id)
            self._validate_appointment_started(appointment, start)
            values["appointment_id"] = appointment.id
        else:
            project: Project = await self._get_assigned_project(db, actor, data.project_id)
            values["project_id"] = project.id

        log: TimeLog = await time_log_repository.create(db, values)
        return self.to_response(log)

    async def list_my_time_logs(self, db: AsyncSession, actor: User) -> list[TimeLogResponse]:
        """내 작업 시간 기록 (Caller's time logs, most recent first)."""
        logs: list[TimeLog] = await time_log_repository.list_logs(db, employee_id=actor.id)
        return [self.to_response(log) for log in logs]

    async def list_for_appointment(self, db: AsyncSession, actor: User, appointment_id: UUID) -> list[TimeLogResponse]:
        """예약별 작업 시간 기록 (Time logs of an appointment assigned to the caller)."""
        appointment: Appointment = await self._get_assigned_appointment(db, actor, appointment_id)
        logs: list[TimeLog] = await time_log_repository.list_logs(db, appointment_id=appointment.id)
        return [self.to_response(log) for log in logs]

    async def list_for_project(self, db: AsyncSession, actor: User, project_id: UUID) -> list[TimeLogResponse]:
        """프로젝트별 작업 시간 기록 (Time logs of a project assigned to the caller)."""
        project: Project = await self._get_assigned_project(db, actor, project_id)
        logs: list[TimeLog] = await time_log_repository.list_logs(db, project_id=project.id)
        return [self.to_response(log) for log in logs]

    async def update_time_log(
        self,
        db: AsyncSession,
        actor: User,
        log_id: UUID,
        data: TimeLogUpdate,
    ) -> TimeLogResponse:
        """작업 시간 기록을 수정합니다.

        Update one of the caller's time logs. Time rules are re-checked and
        the duration recomputed.

        Raises:
            ForbiddenError: 본인 기록 아님 (Not the owner)
            BadRequestError: 시간 규칙 위반 (Time rule violation)
        """
        log: TimeLog = await self._get_own_log(db, actor, log_id)
        changes: dict = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        if not changes:
            raise BadRequestError("No valid fields provided for update")

        start: datetime = to_naive_utc(changes["start_time"]) if "start_time" in changes else log.start_time
        end: datetime = to_naive_utc(changes["end_time"]) if "end_time" in changes else log.end_time
        self._validate_window(start, end)
        if log.appointment_id is not None and "start_time" in changes:
            appointment: Appointment = await appointment_service.get_or_404(db, log.appointment_id)
            self._validate_appointment_started(appointment, start)

        log.start_time = start
        log.end_time = end
        log.duration_minutes = minutes_between(start, end)
        if "work_description" in changes:
            log.work_description = changes["work_description"].strip()
        if "notes" in changes:
            log.notes = changes["notes"]

        log = await time_log_repository.save(db, log)
        return self.to_response(log)

    async def delete_time_log(self, db: AsyncSession, actor: User, log_id: UUID) -> None:
        """작업 시간 기록을 삭제합니다 (Delete one of the caller's time logs)."""
        log: TimeLog = await self._get_own_log(db, actor, log_id)
        await time_log_repository.delete(db, log)


# 싱글턴 인스턴스 — Singleton instance
time_log_service: TimeLogService = TimeLogService()
