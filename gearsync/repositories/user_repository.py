"""사용자 레포지토리 — 사용자 조회 및 역할별 목록 쿼리.

User Repository — Lookup and role-filtered listing queries for users.
Extends BaseRepository with email/token lookups used by the auth flows
and the role-based listings used by the admin screens.
"""

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.models.user import User
from gearsync.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        """UserRepository를 초기화합니다.

        Initialize the UserRepository with the User model.
        """
        super().__init__(User)

    async def get_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> User | None:
        """이메일로 사용자를 조회합니다 (대소문자 무시).

        Retrieve a user by email, case-insensitively.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 이메일 주소 (Email address)

        Returns:
            User | None: 사용자 또는 None (User or None)
        """
        result = await db.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def get_by_reset_token(
        self,
        db: AsyncSession,
        token: str,
    ) -> User | None:
        """비밀번호 재설정 토큰으로 사용자를 조회합니다.

        Retrieve the user holding the given password reset token.
        """
        result = await db.execute(
            select(User).where(User.password_reset_token == token)
        )
        return result.scalar_one_or_none()

    async def list_by_role(
        self,
        db: AsyncSession,
        role: str,
        is_active: bool | None = None,
    ) -> list[User]:
        """역할별 사용자 목록을 조회합니다.

        List users with the given role, ordered by name.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            role: 역할 값 (UserRole value)
            is_active: 활성 상태 필터, None이면 전체 (Active filter, None for all)

        Returns:
            list[User]: 사용자 목록 (List of users)
        """
        query: Select = select(User).where(User.role == role)
        if is_active is not None:
            query = query.where(User.is_active == is_active)
        query = query.order_by(User.first_name, User.last_name)
        result = await db.execute(query)
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
