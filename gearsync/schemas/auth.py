"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers registration, login, token refresh, password change and the
OTP-based password reset flow.
"""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """고객 회원가입 요청 스키마.

    Customer self-registration request schema.
    Self-registered accounts always get the CUSTOMER role.

    Attributes:
        email: 로그인 이메일 (Login email, unique)
        password: 비밀번호 (Plain text, will be bcrypt-hashed on server)
        first_name: 이름 (First name)
        last_name: 성 (Last name)
        phone_number: 전화번호 (Phone number, optional)
    """

    email: str = Field(min_length=3, max_length=255)  # 로그인 이메일 (Login email)
    password: str = Field(min_length=8, max_length=128)  # 비밀번호 — 최소 8자 (At least 8 characters)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone_number: str | None = Field(default=None, max_length=30)


class LoginRequest(BaseModel):
    """로그인 요청 스키마.

    Login request schema shared by every role.

    Attributes:
        email: 로그인 이메일 (Login email)
        password: 비밀번호 (Plain text password, verified against bcrypt hash)
    """

    email: str  # 로그인 이메일 (Login email)
    password: str  # 비밀번호 — 평문, 서버에서 bcrypt 해시와 비교 (Plain text, compared to bcrypt hash)


class LoginResponse(BaseModel):
    """로그인 응답 스키마.

    Login response schema.
    Clients use is_first_login to force a password change for accounts
    created with a temporary password.

    Attributes:
        token: JWT 액세스 토큰 (Access token for the Authorization header)
        role: 역할 (CUSTOMER | EMPLOYEE | ADMIN)
        is_first_login: 임시 비밀번호 사용 여부 (Temporary password still in use)
    """

    token: str  # JWT 액세스 토큰 (Access token)
    role: str  # 역할 (Account role)
    is_first_login: bool  # 첫 로그인 여부 (Temporary password still in use)
    token_type: str = "bearer"  # 토큰 유형 — 항상 "bearer" (Token type for Authorization header)


class ChangePasswordRequest(BaseModel):
    """비밀번호 변경 요청 스키마.

    Attributes:
        old_password: 현재 비밀번호 (Current password)
        new_password: 새 비밀번호 (New password, at least 8 characters)
        confirm_password: 새 비밀번호 확인 (Must equal new_password)
    """

    old_password: str
    new_password: str = Field(min_length=8, max_length=128)
    confirm_password: str


class ForgotPasswordRequest(BaseModel):
    """비밀번호 찾기 요청 — OTP 발송 (Request a reset OTP by email)."""

    email: str


class VerifyOtpRequest(BaseModel):
    """OTP 검증 요청 스키마 (OTP verification request)."""

    email: str
    otp: str = Field(min_length=6, max_length=6)


class VerifyOtpResponse(BaseModel):
    """OTP 검증 응답 — 재설정 토큰 발급.

    OTP verification response carrying the opaque reset token that the
    reset-password call must present.
    """

    reset_token: str
    message: str = "OTP verified"


class ResetPasswordRequest(BaseModel):
    """비밀번호 재설정 요청 스키마 (Reset password with a verified token)."""

    reset_token: str
    new_password: str = Field(min_length=8, max_length=128)
    confirm_password: str
