"""작업 시간 레포지토리 (Time log repository)."""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.models.time_log import TimeLog
from gearsync.repositories.base import BaseRepository


class TimeLogRepository(BaseRepository[TimeLog]):
    """작업 시간 테이블 레포지토리 (Repository for the time_logs table)."""

    def __init__(self) -> None:
        super().__init__(TimeLog)

    async def list_logs(
        self,
        db: AsyncSession,
        employee_id: UUID | None = None,
        appointment_id: UUID | None = None,
        project_id: UUID | None = None,
    ) -> list[TimeLog]:
        """작업 시간 기록을 최신 시작순으로 조회합니다.

        List time logs, most recent start first, filtered by employee,
        appointment or project.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            employee_id: 기록 직원 필터 (Employee filter)
            appointment_id: 예약 필터 (Appointment filter)
            project_id: 프로젝트 필터 (Project filter)

        Returns:
            list[TimeLog]: 작업 시간 목록 (List of time logs)
        """
        query: Select = select(TimeLog)
        if employee_id is not None:
            query = query.where(TimeLog.employee_id == employee_id)
        if appointment_id is not None:
            query = query.where(TimeLog.appointment_id == appointment_id)
        if project_id is not None:
            query = query.where(TimeLog.project_id == project_id)
        result = await db.execute(query.order_by(TimeLog.start_time.desc()))
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
time_log_repository: TimeLogRepository = TimeLogRepository()
