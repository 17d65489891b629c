"""서비스 카탈로그 레포지토리.

Service catalog repository — name lookups, bulk id lookups and
active-only listings.
"""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.models.catalog import Service
from gearsync.repositories.base import BaseRepository


class ServiceRepository(BaseRepository[Service]):
    """서비스 테이블 레포지토리 (Repository for the services table)."""

    def __init__(self) -> None:
        super().__init__(Service)

    async def get_by_name(self, db: AsyncSession, name: str) -> Service | None:
        """이름으로 서비스를 조회합니다 (Retrieve a service by exact name)."""
        result = await db.execute(select(Service).where(Service.name == name))
        return result.scalar_one_or_none()

    async def get_by_ids(
        self,
        db: AsyncSession,
        service_ids: Iterable[UUID],
    ) -> list[Service]:
        """ID 목록에 해당하는 서비스를 조회합니다.

        Retrieve every service whose id is in the given collection.
        Missing ids are silently absent from the result.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            service_ids: 서비스 ID 목록 (Service UUIDs)

        Returns:
            list[Service]: 조회된 서비스 목록 (Found services)
        """
        ids: list[UUID] = list(service_ids)
        if not ids:
            return []
        result = await db.execute(select(Service).where(Service.id.in_(ids)))
        return list(result.scalars().all())

    async def list_services(
        self,
        db: AsyncSession,
        active_only: bool = False,
    ) -> list[Service]:
        """서비스 목록을 이름순으로 조회합니다 (List services sorted by name)."""
        query: Select = select(Service)
        if active_only:
            query = query.where(Service.is_active.is_(True))
        result = await db.execute(query.order_by(Service.name))
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
service_repository: ServiceRepository = ServiceRepository()
