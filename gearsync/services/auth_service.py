"""인증 서비스 — 회원가입, 로그인, 토큰 갱신 비즈니스 로직.

Auth Service — Business logic for registration, login, current user
lookup and token refresh.
"""

from datetime import datetime, timezone

from fastapi import BackgroundTasks
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.models.user import User, UserRole
from gearsync.repositories.user_repository import user_repository
from gearsync.schemas.auth import LoginRequest, LoginResponse, RegisterRequest
from gearsync.schemas.user import UserResponse
from gearsync.services.email_service import email_service
from gearsync.utils.exceptions import DuplicateError, UnauthorizedError
from gearsync.utils.jwt import create_access_token
from gearsync.utils.password import hash_password, verify_password


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling authentication business logic.
    Tokens are stateless; logout only acknowledges the request and the
    client discards its token.
    """

    def to_user_response(self, user: User) -> UserResponse:
        """사용자 모델을 응답 스키마로 변환합니다.

        Convert a User model instance to a UserResponse schema.

        Args:
            user: 사용자 모델 (User model instance)

        Returns:
            UserResponse: 사용자 응답 (User response)
        """
        return UserResponse(
            id=str(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            phone_number=user.phone_number,
            role=user.role,
            is_active=user.is_active,
            is_first_login=user.is_first_login,
            created_at=user.created_at,
        )

    def _issue_token(self, user: User) -> str:
        """사용자 ID와 역할로 액세스 토큰을 발급합니다 (Issue an access token)."""
        return create_access_token({"sub": str(user.id), "role": user.role})

    async def register(
        self,
        db: AsyncSession,
        data: RegisterRequest,
        background_tasks: BackgroundTasks,
    ) -> UserResponse:
        """고객 회원가입을 처리합니다.

        Register a new CUSTOMER account and send a welcome email.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 회원가입 요청 데이터 (Registration request data)
            background_tasks: 환영 메일 발송 큐 (Queue for the welcome email)

        Returns:
            UserResponse: 생성된 사용자 (Created user)

        Raises:
            DuplicateError: 이메일 중복 시 (Email already registered)
        """
        email: str = data.email.strip().lower()
        if await user_repository.get_by_email(db, email) is not None:
            raise DuplicateError("Email already registered")

        user: User = await user_repository.create(
            db,
            {
                "email": email,
                "first_name": data.first_name.strip(),
                "last_name": data.last_name.strip(),
                "phone_number": data.phone_number,
                "role": UserRole.CUSTOMER.value,
                "password_hash": hash_password(data.password),
                "is_first_login": False,
            },
        )
        email_service.send_welcome_email(background_tasks, user)
        return self.to_user_response(user)

    async def login(
        self,
        db: AsyncSession,
        data: LoginRequest,
    ) -> LoginResponse:
        """로그인을 처리합니다.

        Verify credentials, record the login time and issue an access token.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 로그인 요청 데이터 (Login request data)

        Returns:
            LoginResponse: 토큰, 역할, 첫 로그인 여부 (Token, role and first-login flag)

        Raises:
            UnauthorizedError: 잘못된 자격 증명 또는 비활성 계정
                               (Invalid credentials or inactive account)
        """
        user: User | None = await user_repository.get_by_email(db, data.email)
        if user is None or not verify_password(data.password, user.password_hash):
            raise UnauthorizedError("Invalid email or password")
        if not user.is_active:
            raise UnauthorizedError("Account is deactivated")

        user.last_login_at = datetime.now(timezone.utc)
        await user_repository.save(db, user)

        return LoginResponse(
            token=self._issue_token(user),
            role=user.role,
            is_first_login=user.is_first_login,
        )

    async def refresh(self, user: User) -> LoginResponse:
        """현재 사용자에게 새 액세스 토큰을 발급합니다 (Re-issue a token for the caller)."""
        return LoginResponse(
            token=self._issue_token(user),
            role=user.role,
            is_first_login=user.is_first_login,
        )

    def get_me(self, user: User) -> UserResponse:
        """현재 사용자 프로필 (Current user profile)."""
        return self.to_user_response(user)


# 싱글턴 인스턴스 — Singleton instance
auth_service: AuthService = AuthService()
