"""초기 데이터 시드 스크립트 — 테이블 및 관리자 계정 생성.

Seed script — Creates the schema and the first admin account.
Run this script once to bootstrap an empty database.

Usage:
    python -m gearsync.seed

Creates:
    - 모든 테이블 (All tables from ORM metadata)
    - 1개 관리자 계정: SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD (1 admin user)
"""

import asyncio
import logging

from gearsync.config import settings
from gearsync.database import async_session, engine, Base
from gearsync.models import User, UserRole
from gearsync.repositories.user_repository import user_repository
from gearsync.utils.password import hash_password

logger = logging.getLogger(__name__)


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with initial data.
    Creates tables if they don't exist, then inserts the admin user.

    Idempotent: 관리자 이메일이 이미 있으면 건너뜁니다 (Skips if the admin email exists).
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        existing: User | None = await user_repository.get_by_email(db, settings.SEED_ADMIN_EMAIL)
        if existing is not None:
            logger.info("Admin %s already exists. Skipping.", existing.email)
            return

        admin: User = User(
            email=settings.SEED_ADMIN_EMAIL.lower(),
            first_name="System",
            last_name="Admin",
            role=UserRole.ADMIN.value,
            password_hash=hash_password(settings.SEED_ADMIN_PASSWORD),
            is_active=True,
            is_first_login=True,
        )
        db.add(admin)
        await db.commit()
        logger.info("Seeded admin user %s", admin.email)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())
