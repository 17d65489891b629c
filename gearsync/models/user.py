"""사용자 관련 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definitions.
A single users table holds customers, employees and administrators;
the role column decides which API surface an account may use.

Tables:
    - users: 사용자 계정 (User accounts with role, password and reset state)
"""

import enum
import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from gearsync.database import Base


class UserRole(str, enum.Enum):
    """사용자 역할 — 생성 후 변경 불가 (Account role, immutable after creation)."""

    CUSTOMER = "CUSTOMER"
    EMPLOYEE = "EMPLOYEE"
    ADMIN = "ADMIN"


# 직원 업무 수행 가능 역할 — Roles allowed to be assigned work and log time
STAFF_ROLES: tuple[str, ...] = (UserRole.EMPLOYEE.value, UserRole.ADMIN.value)


class User(Base):
    """사용자 모델 — 시스템 사용자 계정 정보.

    User model — System user account information.
    Customers self-register; employees and admins are provisioned by an
    admin with a temporary password and must change it on first login.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        email: 로그인 이메일 (Login email, globally unique)
        first_name: 이름 (First name)
        last_name: 성 (Last name)
        phone_number: 전화번호 (Phone number, optional)
        role: 역할 (CUSTOMER | EMPLOYEE | ADMIN)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        is_active: 활성 상태 (Inactive accounts cannot log in or be assigned work)
        is_first_login: 임시 비밀번호 사용 중 여부 (Still using a temporary password)
        is_password_changed: 비밀번호 변경 이력 (Password has been changed at least once)
        reset_otp: 비밀번호 재설정 OTP (Pending 6-digit reset code)
        reset_otp_expires_at: OTP 만료 일시, naive UTC (OTP expiry)
        password_reset_token: 재설정 토큰 (Token issued after OTP verification)
        password_reset_token_expiry: 재설정 토큰 만료 일시, naive UTC (Reset token expiry)
        last_login_at: 마지막 로그인 일시 (Last successful login)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "users"

    # 사용자 고유 식별자 — User unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 로그인 이메일 — Login email (전역 고유, globally unique)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    # 이름 — First name
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    # 성 — Last name
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    # 전화번호 — Phone number (optional)
    phone_number: Mapped[str | None] = mapped_column(String(30), nullable=True)
    # 역할 — Account role (UserRole 값, immutable)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=UserRole.CUSTOMER.value)
    # 비밀번호 해시 — bcrypt hashed password (평문 저장 금지, never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    # 활성 상태 — Whether the user account is active
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    # 첫 로그인 여부 — True while the account still uses a temporary password
    is_first_login: Mapped[bool] = mapped_column(Boolean, default=False)
    # 비밀번호 변경 여부 — Whether the password was changed at least once
    is_password_changed: Mapped[bool] = mapped_column(Boolean, default=False)
    # 재설정 OTP — Pending password reset code
    reset_otp: Mapped[str | None] = mapped_column(String(10), nullable=True)
    reset_otp_expires_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    # 재설정 토큰 — Reset token issued after OTP verification
    password_reset_token: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    password_reset_token_expiry: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    # 마지막 로그인 — Last successful login (UTC)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    @property
    def full_name(self) -> str:
        """표시용 전체 이름 (Display name)."""
        return f"{self.first_name} {self.last_name}"
