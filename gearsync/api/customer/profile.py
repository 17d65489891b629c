"""고객 프로필 라우터 — 내 정보 조회/수정.

Customer Profile Router — Read and update the caller's own profile.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.api.deps import require_customer
from gearsync.database import get_db
from gearsync.models.user import User
from gearsync.schemas.user import ProfileUpdate, UserResponse
from gearsync.services.profile_service import profile_service

router: APIRouter = APIRouter()


@router.get("", response_model=UserResponse)
async def get_profile(
    current_user: Annotated[User, Depends(require_customer)],
) -> UserResponse:
    """내 프로필 조회 (Get my profile)."""
    return profile_service.get_profile(current_user)


@router.put("", response_model=UserResponse)
async def update_profile(
    data: ProfileUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_customer)],
) -> UserResponse:
    """내 프로필 수정 — 이름, 전화번호.

    Update my first name, last name or phone number.
    """
    result: UserResponse = await profile_service.update_profile(db, current_user, data)
    await db.commit()
    return result
