"""서비스 카탈로그 서비스 — 정비 항목 CRUD 비즈니스 로직.

Catalog Service — Business logic for service catalog CRUD.
Services are never hard-deleted because past appointments reference
them; deleting deactivates.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.models.catalog import Service
from gearsync.repositories.service_repository import service_repository
from gearsync.schemas.catalog import ServiceCreate, ServiceResponse, ServiceUpdate
from gearsync.utils.exceptions import DuplicateError, NotFoundError


class CatalogService:
    """서비스 카탈로그 비즈니스 로직 (Service catalog business logic)."""

    def to_response(self, service: Service) -> ServiceResponse:
        """서비스 모델을 응답 스키마로 변환합니다 (Convert a Service to its response)."""
        return ServiceResponse(
            id=str(service.id),
            name=service.name,
            description=service.description,
            base_price=service.base_price,
            estimated_duration_minutes=service.estimated_duration_minutes,
            category=service.category,
            is_active=service.is_active,
            created_at=service.created_at,
        )

    async def _get_or_404(self, db: AsyncSession, service_id: UUID) -> Service:
        service: Service | None = await service_repository.get_by_id(db, service_id)
        if service is None:
            raise NotFoundError("Service not found")
        return service

    async def create_service(
        self,
        db: AsyncSession,
        data: ServiceCreate,
    ) -> ServiceResponse:
        """새 서비스를 생성합니다.

        Create a catalog item. Names are unique.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 서비스 생성 데이터 (Service creation data)

        Returns:
            ServiceResponse: 생성된 서비스 (Created service)

        Raises:
            DuplicateError: 이름 중복 (Service name already exists)
        """
        name: str = data.name.strip()
        if await service_repository.get_by_name(db, name) is not None:
            raise DuplicateError(f"Service name already exists: {name}")

        service: Service = await service_repository.create(
            db,
            {
                "name": name,
                "description": data.description,
                "base_price": data.base_price,
                "estimated_duration_minutes": data.estimated_duration_minutes,
                "category": data.category.value,
                "is_active": True,
            },
        )
        return self.to_response(service)

    async def list_services(
        self,
        db: AsyncSession,
        active_only: bool = False,
    ) -> list[ServiceResponse]:
        """서비스 목록을 이름순으로 조회합니다 (List services sorted by name)."""
        services: list[Service] = await service_repository.list_services(db, active_only=active_only)
        return [self.to_response(s) for s in services]

    async def update_service(
        self,
        db: AsyncSession,
        service_id: UUID,
        data: ServiceUpdate,
    ) -> ServiceResponse:
        """서비스를 부분 업데이트합니다.

        Partially update a catalog item.

        Raises:
            NotFoundError: 서비스 없음 (Service not found)
            DuplicateError: 변경할 이름이 이미 존재 (New name already taken)
        """
        service: Service = await self._get_or_404(db, service_id)
        update_data: dict = data.model_dump(exclude_unset=True)

        if update_data.get("name") is not None:
            name: str = update_data["name"].strip()
            existing: Service | None = await service_repository.get_by_name(db, name)
            if existing is not None and existing.id != service.id:
                raise DuplicateError(f"Service name already exists: {name}")
            update_data["name"] = name
        if update_data.get("category") is not None:
            update_data["category"] = update_data["category"].value

        # NOT NULL 컬럼에 None 전달 방지 — Drop explicit nulls for required columns
        for field in ("name", "base_price", "estimated_duration_minutes", "category", "is_active"):
            if field in update_data and update_data[field] is None:
                del update_data[field]

        service = await service_repository.update(db, service, update_data)
        return self.to_response(service)

    async def deactivate_service(self, db: AsyncSession, service_id: UUID) -> None:
        """서비스를 비활성화합니다 (Deactivate a service so it can no longer be booked)."""
        service: Service = await self._get_or_404(db, service_id)
        service.is_active = False
        await service_repository.save(db, service)


# 싱글턴 인스턴스 — Singleton instance
catalog_service: CatalogService = CatalogService()
