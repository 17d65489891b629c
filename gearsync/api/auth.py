"""인증 라우터 — 회원가입, 로그인, 토큰 갱신, 비밀번호 관리.

Auth Router — Registration, login, token refresh, logout and password
management endpoints shared by every role.
"""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.api.deps import get_current_user
from gearsync.database import get_db
from gearsync.models.user import User
from gearsync.schemas.auth import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    ResetPasswordRequest,
    VerifyOtpRequest,
    VerifyOtpResponse,
)
from gearsync.schemas.common import MessageResponse
from gearsync.schemas.user import UserResponse
from gearsync.services.auth_service import auth_service
from gearsync.services.password_service import password_service

router: APIRouter = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(
    data: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    background_tasks: BackgroundTasks,
) -> UserResponse:
    """고객 회원가입.

    Register a new customer account.
    """
    result: UserResponse = await auth_service.register(db, data, background_tasks)
    await db.commit()
    return result


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LoginResponse:
    """로그인 — 액세스 토큰 발급.

    Log in with email and password and receive an access token.
    """
    result: LoginResponse = await auth_service.login(db, data)
    await db.commit()
    return result


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    """현재 사용자 프로필 조회.

    Get the profile of the currently authenticated user.
    """
    return auth_service.get_me(current_user)


@router.post("/refresh", response_model=LoginResponse)
async def refresh_token(
    current_user: Annotated[User, Depends(get_current_user)],
) -> LoginResponse:
    """토큰 갱신 — 유효한 토큰으로 새 토큰 발급.

    Issue a fresh access token for the current user.
    """
    return await auth_service.refresh(current_user)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    """로그아웃 — 클라이언트가 토큰을 폐기.

    Logout endpoint. Tokens are stateless; the client discards its token.
    """
    return MessageResponse(message="Logged out successfully")


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    data: ChangePasswordRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    background_tasks: BackgroundTasks,
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    """비밀번호 변경 (Change the current user's password)."""
    result: MessageResponse = await password_service.change_password(db, current_user, data, background_tasks)
    await db.commit()
    return result


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    data: ForgotPasswordRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    background_tasks: BackgroundTasks,
) -> MessageResponse:
    """비밀번호 찾기 — OTP 메일 발송 (Email a password reset OTP)."""
    result: MessageResponse = await password_service.forgot_password(db, data, background_tasks)
    await db.commit()
    return result


@router.post("/verify-otp", response_model=VerifyOtpResponse)
async def verify_otp(
    data: VerifyOtpRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VerifyOtpResponse:
    """OTP 검증 — 재설정 토큰 발급 (Exchange an OTP for a reset token)."""
    result: VerifyOtpResponse = await password_service.verify_otp(db, data)
    await db.commit()
    return result


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    data: ResetPasswordRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    background_tasks: BackgroundTasks,
) -> MessageResponse:
    """비밀번호 재설정 (Set a new password with a reset token)."""
    result: MessageResponse = await password_service.reset_password(db, data, background_tasks)
    await db.commit()
    return result
