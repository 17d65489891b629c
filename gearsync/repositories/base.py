"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all domain repositories.
Provides generic Create, Read, Update, Delete and count operations.

Usage:
    class VehicleRepository(BaseRepository[Vehicle]):
        def __init__(self) -> None:
            super().__init__(Vehicle)
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gearsync.database import Base

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository providing common database operations.
    Mutating methods only flush; committing is left to the caller.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        """레포지토리를 초기화합니다.

        Initialize the repository with a model class.

        Args:
            model: 이 레포지토리가 관리할 SQLAlchemy 모델 클래스
                   (SQLAlchemy model class this repository manages)
        """
        self.model: type[ModelType] = model

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: UUID,
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a single record by its UUID.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드의 UUID (UUID of the record to retrieve)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = select(self.model).where(self.model.id == record_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
    ) -> ModelType:
        """새 레코드를 생성합니다.

        Create a new record in the database.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            obj_data: 생성할 레코드의 데이터 딕셔너리
                      (Dictionary of data for the new record)

        Returns:
            ModelType: 생성된 레코드 (The created record)
        """
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def save(
        self,
        db: AsyncSession,
        db_obj: ModelType,
    ) -> ModelType:
        """변경된 레코드를 반영하고 다시 로드합니다.

        Flush pending changes on an already-loaded record and reload it,
        including its eagerly loaded relationships.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            db_obj: 변경된 레코드 (Modified record)

        Returns:
            ModelType: 다시 로드된 레코드 (Refreshed record)
        """
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        db_obj: ModelType,
        update_data: dict[str, Any],
    ) -> ModelType:
        """기존 레코드를 업데이트합니다.

        Apply a partial update to a loaded record.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            db_obj: 업데이트할 레코드 (Record to update)
            update_data: 업데이트할 필드와 값의 딕셔너리
                         (Dictionary of fields and values to update)

        Returns:
            ModelType: 업데이트된 레코드 (Updated record)
        """
        # Pydantic exclude_unset으로 전달된 필드만 업데이트
        # Update only the fields passed via exclude_unset
        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        return await self.save(db, db_obj)

    async def delete(
        self,
        db: AsyncSession,
        db_obj: ModelType,
    ) -> None:
        """레코드를 삭제합니다.

        Delete a loaded record.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            db_obj: 삭제할 레코드 (Record to delete)
        """
        await db.delete(db_obj)
        await db.flush()

    async def count(
        self,
        db: AsyncSession,
        filters: dict[str, Any] | None = None,
    ) -> int:
        """조건에 맞는 레코드 수를 반환합니다.

        Count records matching the given equality filters.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 검색 조건 딕셔너리 (Filter criteria dictionary)

        Returns:
            int: 레코드 수 (Number of matching records)
        """
        query: Select = select(func.count()).select_from(self.model)
        for column_name, value in (filters or {}).items():
            if hasattr(self.model, column_name):
                query = query.where(getattr(self.model, column_name) == value)
        return (await db.execute(query)).scalar() or 0
