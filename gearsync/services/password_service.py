"""비밀번호 서비스 — 비밀번호 변경 및 OTP 기반 재설정.

Password Service — Password change and the OTP-based reset flow.

Reset flow:
    1. forgot_password: 6자리 OTP 생성 및 메일 발송 (Generate and email a 6-digit OTP)
    2. verify_otp: OTP 검증 후 재설정 토큰 발급 (Exchange a valid OTP for a reset token)
    3. reset_password: 재설정 토큰으로 새 비밀번호 설정 (Set a new password with the token)
"""

import hmac
from datetime import datetime, timedelta

from fastapi import BackgroundTasks
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.config import settings
from gearsync.models.user import User
from gearsync.repositories.user_repository import user_repository
from gearsync.schemas.auth import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    VerifyOtpRequest,
    VerifyOtpResponse,
)
from gearsync.schemas.common import MessageResponse
from gearsync.services.email_service import email_service
from gearsync.utils.clock import utcnow
from gearsync.utils.exceptions import BadRequestError, NotFoundError
from gearsync.utils.password import (
    generate_otp,
    generate_reset_token,
    hash_password,
    verify_password,
)


class PasswordService:
    """비밀번호 관련 비즈니스 로직을 처리하는 서비스.

    Service handling password change and password reset.
    """

    async def change_password(
        self,
        db: AsyncSession,
        user: User,
        data: ChangePasswordRequest,
        background_tasks: BackgroundTasks,
    ) -> MessageResponse:
        """비밀번호를 변경합니다.

        Change the caller's password. Clears the first-login flag so that
        provisioned staff stop being prompted for a new password.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 현재 사용자 (Current user)
            data: 비밀번호 변경 요청 (Password change request)

        Returns:
            MessageResponse: 완료 메시지 (Confirmation message)

        Raises:
            BadRequestError: 현재 비밀번호 불일치, 확인 불일치, 동일 비밀번호
                             (Wrong current password, mismatch, or unchanged password)
        """
        if not verify_password(data.old_password, user.password_hash):
            raise BadRequestError("Current password is incorrect")
        if data.new_password != data.confirm_password:
            raise BadRequestError("New password and confirmation do not match")
        if data.new_password == data.old_password:
            raise BadRequestError("New password must be different from the current password")

        user.password_hash = hash_password(data.new_password)
        user.is_first_login = False
        user.is_password_changed = True
        await user_repository.save(db, user)
        email_service.send_password_changed(background_tasks, user)
        return MessageResponse(message="Password changed successfully")

    async def forgot_password(
        self,
        db: AsyncSession,
        data: ForgotPasswordRequest,
        background_tasks: BackgroundTasks,
    ) -> MessageResponse:
        """비밀번호 재설정 OTP를 발급하고 메일로 보냅니다.

        Issue a password reset OTP valid for OTP_EXPIRE_MINUTES and email it.
        Any previously issued reset token is invalidated.

        Raises:
            NotFoundError: 등록되지 않은 이메일 (Unknown email)
        """
        user: User | None = await user_repository.get_by_email(db, data.email)
        if user is None:
            raise NotFoundError("No account found with this email")

        otp: str = generate_otp()
        user.reset_otp = otp
        user.reset_otp_expires_at = utcnow() + timedelta(minutes=settings.OTP_EXPIRE_MINUTES)
        user.password_reset_token = None
        user.password_reset_token_expiry = None
        await user_repository.save(db, user)
        email_service.send_password_reset_otp(background_tasks, user, otp)
        return MessageResponse(message="A reset code has been sent to your email")

    async def verify_otp(
        self,
        db: AsyncSession,
        data: VerifyOtpRequest,
    ) -> VerifyOtpResponse:
        """OTP를 검증하고 재설정 토큰을 발급합니다.

        Verify the OTP and exchange it for a reset token valid for
        RESET_TOKEN_EXPIRE_MINUTES. The OTP is single-use.

        Raises:
            NotFoundError: 등록되지 않은 이메일 (Unknown email)
            BadRequestError: OTP 불일치 또는 만료 (Wrong or expired OTP)
        """
        user: User | None = await user_repository.get_by_email(db, data.email)
        if user is None:
            raise NotFoundError("No account found with this email")
        if user.reset_otp is None or not hmac.compare_digest(user.reset_otp, data.otp):
            raise BadRequestError("Invalid OTP")
        expires_at: datetime | None = user.reset_otp_expires_at
        if expires_at is None or expires_at < utcnow():
            raise BadRequestError("OTP has expired")

        token: str = generate_reset_token()
        user.reset_otp = None
        user.reset_otp_expires_at = None
        user.password_reset_token = token
        user.password_reset_token_expiry = utcnow() + timedelta(minutes=settings.RESET_TOKEN_EXPIRE_MINUTES)
        await user_repository.save(db, user)
        return VerifyOtpResponse(reset_token=token)

    async def reset_password(
        self,
        db: AsyncSession,
        data: ResetPasswordRequest,
        background_tasks: BackgroundTasks,
    ) -> MessageResponse:
        """재설정 토큰으로 새 비밀번호를 설정합니다.

        Set a new password using a reset token, then clear the token.

        Raises:
            BadRequestError: 토큰이 없거나 만료, 확인 불일치
                             (Unknown/expired token or confirmation mismatch)
        """
        user: User | None = await user_repository.get_by_reset_token(db, data.reset_token)
        if user is None:
            raise BadRequestError("Invalid reset token")
        expiry: datetime | None = user.password_reset_token_expiry
        if expiry is None or expiry < utcnow():
            raise BadRequestError("Reset token has expired")
        if data.new_password != data.confirm_password:
            raise BadRequestError("New password and confirmation do not match")

        user.password_hash = hash_password(data.new_password)
        user.password_reset_token = None
        user.password_reset_token_expiry = None
        user.is_first_login = False
        user.is_password_changed = True
        await user_repository.save(db, user)
        email_service.send_password_reset_confirmation(background_tasks, user)
        return MessageResponse(message="Password has been reset successfully")


# 싱글턴 인스턴스 — Singleton instance
password_service: PasswordService = PasswordService()
