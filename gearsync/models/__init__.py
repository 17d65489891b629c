"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    user: 사용자 및 역할 (User accounts and roles)
    vehicle: 고객 차량 (Customer vehicles)
    catalog: 서비스 카탈로그 및 예약-서비스 연결 (Service catalog and appointment link table)
    appointment: 정비 예약 (Service appointments)
    project: 프로젝트 요청 (Project requests)
    time_log: 직원 작업 시간 (Employee time logs)
"""

from gearsync.models.user import User, UserRole
from gearsync.models.vehicle import Vehicle
from gearsync.models.catalog import Service, ServiceCategory, appointment_services
from gearsync.models.appointment import Appointment, AppointmentStatus
from gearsync.models.project import Project, ProjectStatus
from gearsync.models.time_log import TimeLog

__all__ = [
    "User", "UserRole",
    "Vehicle",
    "Service", "ServiceCategory", "appointment_services",
    "Appointment", "AppointmentStatus",
    "Project", "ProjectStatus",
    "TimeLog",
]
