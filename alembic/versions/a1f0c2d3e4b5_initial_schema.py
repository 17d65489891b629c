"""initial_schema

Revision ID: a1f0c2d3e4b5
Revises:
Create Date: 2026-10-19 09:00:00.000000

정비소 기본 스키마 생성: users, vehicles, services, appointments,
appointment_services, projects, time_logs.
Create the service shop schema: users, vehicles, services, appointments,
appointment_services, projects, time_logs.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = 'a1f0c2d3e4b5'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # users — 고객, 직원, 관리자 계정 (Customer, employee and admin accounts)
    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('phone_number', sa.String(30), nullable=True),
        sa.Column('role', sa.String(20), server_default='CUSTOMER', nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('is_first_login', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('is_password_changed', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('reset_otp', sa.String(10), nullable=True),
        sa.Column('reset_otp_expires_at', sa.DateTime(), nullable=True),
        sa.Column('password_reset_token', sa.String(255), nullable=True),
        sa.Column('password_reset_token_expiry', sa.DateTime(), nullable=True),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_password_reset_token', 'users', ['password_reset_token'])

    # vehicles — 고객 차량 (Customer vehicles, registration number unique)
    op.create_table(
        'vehicles',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('owner_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('registration_number', sa.String(20), nullable=False, unique=True),
        sa.Column('make', sa.String(100), nullable=False),
        sa.Column('model', sa.String(100), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('color', sa.String(50), nullable=True),
        sa.Column('vin', sa.String(17), nullable=True),
        sa.Column('mileage', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_vehicles_owner_id', 'vehicles', ['owner_id'])

    # services — 서비스 카탈로그 (Bookable service catalog)
    op.create_table(
        'services',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(150), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('base_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('estimated_duration_minutes', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(30), server_default='OTHER', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # appointments — 정비 예약 (Service appointments)
    op.create_table(
        'appointments',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('customer_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('vehicle_id', UUID(as_uuid=True), sa.ForeignKey('vehicles.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('employee_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('scheduled_date_time', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(20), server_default='SCHEDULED', nullable=False),
        sa.Column('estimated_cost', sa.Numeric(10, 2), server_default='0', nullable=False),
        sa.Column('final_cost', sa.Numeric(10, 2), nullable=True),
        sa.Column('estimated_duration_minutes', sa.Integer(), server_default='0', nullable=False),
        sa.Column('customer_notes', sa.Text(), nullable=True),
        sa.Column('employee_notes', sa.Text(), nullable=True),
        sa.Column('progress_percentage', sa.Integer(), server_default='0', nullable=False),
        sa.Column('actual_start_time', sa.DateTime(), nullable=True),
        sa.Column('actual_end_time', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_appointments_customer_id', 'appointments', ['customer_id'])
    op.create_index('ix_appointments_vehicle_id', 'appointments', ['vehicle_id'])
    op.create_index('ix_appointments_employee_id', 'appointments', ['employee_id'])
    op.create_index('ix_appointments_scheduled_date_time', 'appointments', ['scheduled_date_time'])

    # appointment_services — 예약-서비스 연결 (Appointment to service link)
    op.create_table(
        'appointment_services',
        sa.Column('appointment_id', UUID(as_uuid=True), sa.ForeignKey('appointments.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('service_id', UUID(as_uuid=True), sa.ForeignKey('services.id', ondelete='RESTRICT'), primary_key=True),
    )

    # projects — 맞춤 작업 요청 (Custom modification projects)
    op.create_table(
        'projects',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('customer_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('vehicle_id', UUID(as_uuid=True), sa.ForeignKey('vehicles.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('employee_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('additional_notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), server_default='PENDING', nullable=False),
        sa.Column('estimated_cost', sa.Numeric(10, 2), nullable=True),
        sa.Column('actual_cost', sa.Numeric(10, 2), nullable=True),
        sa.Column('estimated_duration_hours', sa.Integer(), nullable=True),
        sa.Column('progress_percentage', sa.Integer(), server_default='0', nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=True),
        sa.Column('expected_completion_date', sa.DateTime(), nullable=True),
        sa.Column('completion_date', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_projects_customer_id', 'projects', ['customer_id'])
    op.create_index('ix_projects_vehicle_id', 'projects', ['vehicle_id'])
    op.create_index('ix_projects_employee_id', 'projects', ['employee_id'])

    # time_logs — 작업 시간 기록, 예약 또는 프로젝트 중 하나만
    # Time logs referencing exactly one of appointment or project
    op.create_table(
        'time_logs',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('employee_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('appointment_id', UUID(as_uuid=True), sa.ForeignKey('appointments.id', ondelete='CASCADE'), nullable=True),
        sa.Column('project_id', UUID(as_uuid=True), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=True),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), server_default='0', nullable=False),
        sa.Column('work_description', sa.Text(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint(
            '(appointment_id IS NULL) <> (project_id IS NULL)',
            name='ck_time_log_single_target',
        ),
    )
    op.create_index('ix_time_logs_employee_id', 'time_logs', ['employee_id'])
    op.create_index('ix_time_logs_appointment_id', 'time_logs', ['appointment_id'])
    op.create_index('ix_time_logs_project_id', 'time_logs', ['project_id'])


def downgrade() -> None:
    op.drop_table('time_logs')
    op.drop_table('projects')
    op.drop_table('appointment_services')
    op.drop_table('appointments')
    op.drop_table('services')
    op.drop_table('vehicles')
    op.drop_table('users')
