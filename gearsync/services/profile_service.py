"""프로필 서비스 — 고객 본인 프로필 조회 및 수정.

Profile Service — Customer self-service profile read and update.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.models.user import User, UserRole
from gearsync.repositories.user_repository import user_repository
from gearsync.schemas.user import ProfileUpdate, UserResponse
from gearsync.services.auth_service import auth_service
from gearsync.utils.exceptions import BadRequestError, ForbiddenError


class ProfileService:
    """고객 프로필 비즈니스 로직 (Customer profile business logic)."""

    def get_profile(self, user: User) -> UserResponse:
        """내 프로필 조회 (Current user's profile)."""
        return auth_service.to_user_response(user)

    async def update_profile(
        self,
        db: AsyncSession,
        user: User,
        data: ProfileUpdate,
    ) -> UserResponse:
        """내 프로필을 수정합니다.

        Update the caller's name and phone number. Only customers manage
        their own profile; staff records are maintained by admins.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 현재 사용자 (Current user)
            data: 프로필 수정 데이터 (Profile update data)

        Returns:
            UserResponse: 수정된 프로필 (Updated profile)

        Raises:
            ForbiddenError: 고객이 아님 (Caller is not a customer)
            BadRequestError: 변경할 필드 없음 (No field given)
        """
        if user.role != UserRole.CUSTOMER.value:
            raise ForbiddenError("Only customers can update their profile")

        changes: dict = data.model_dump(exclude_unset=True)
        for field in ("first_name", "last_name"):
            if field in changes and changes[field] is None:
                del changes[field]
            elif field in changes:
                changes[field] = changes[field].strip()
        if not changes:
            raise BadRequestError("No valid fields provided for update")

        user = await user_repository.update(db, user, changes)
        return auth_service.to_user_response(user)


# 싱글턴 인스턴스 — Singleton instance
profile_service: ProfileService = ProfileService()
