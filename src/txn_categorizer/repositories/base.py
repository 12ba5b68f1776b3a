"""Base repository with generic CRUD operations."""
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Generic, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from txn_categorizer.core.exceptions import StoreError
from txn_categorizer.models.base import BaseModel, utcnow

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """Generic repository providing CRUD operations for any model.

    Every call opens its own session from the factory. Usage updates run on
    detached tasks, and an ``AsyncSession`` must never be shared between
    concurrently running tasks.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], model: Type[T]):
        self.session_factory = session_factory
        self.model = model

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Open a session and translate database failures into StoreError."""
        try:
            async with self.session_factory() as session:
                yield session
        except SQLAlchemyError as e:
            raise StoreError(
                operation, {"model": self.model.__tablename__, "error": type(e).__name__}
            ) from e

    async def get_by_id(self, id: UUID) -> T | None:
        """Get a single non-deleted record by ID."""
        async with self._session("get_by_id") as session:
            result = await session.execute(
                select(self.model).where(self.model.id == id, self.model.deleted_at.is_(None))
            )
            return result.scalar_one_or_none()

    async def create(self, obj: T) -> T:
        """Create a new record."""
        async with self._session("create") as session:
            session.add(obj)
            await session.commit()
            await session.refresh(obj)
            return obj

    async def bulk_create(self, objs: Sequence[T]) -> int:
        """Insert many records in a single transaction. Returns the count inserted."""
        if not objs:
            return 0
        async with self._session("bulk_create") as session:
            session.add_all(list(objs))
            await session.commit()
            return len(objs)

    async def delete(self, id: UUID) -> bool:
        """Soft delete a record by ID."""
        async with self._session("delete") as session:
            obj = await session.get(self.model, id)
            if not obj or obj.deleted_at is not None:
                return False
            obj.deleted_at = utcnow()
            await session.commit()
            return True
