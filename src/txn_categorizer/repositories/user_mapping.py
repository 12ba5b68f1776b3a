"""User category mapping repository."""
from uuid import UUID, uuid4

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from txn_categorizer.models.base import utcnow
from txn_categorizer.models.user_mapping import UserCategoryMapping
from txn_categorizer.repositories.base import BaseRepository


class UserMappingRepository(BaseRepository[UserCategoryMapping]):
    """Repository for per-user learned mappings."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(session_factory, UserCategoryMapping)

    async def list_by_user_id(self, user_id: int) -> list[UserCategoryMapping]:
        """A user's mappings, most used and most recently used first."""
        async with self._session("list_user_mappings") as session:
            result = await session.execute(
                select(UserCategoryMapping)
                .where(
                    UserCategoryMapping.user_id == user_id,
                    UserCategoryMapping.deleted_at.is_(None),
                )
                .order_by(
                    UserCategoryMapping.usage_count.desc(),
                    UserCategoryMapping.last_used_at.desc(),
                )
            )
            return list(result.scalars().all())

    async def get_by_user_id_and_pattern(
        self, user_id: int, pattern: str
    ) -> UserCategoryMapping | None:
        """Find the mapping for an exact (user, normalized pattern) pair."""
        async with self._session("get_user_mapping") as session:
            result = await session.execute(
                select(UserCategoryMapping).where(
                    UserCategoryMapping.user_id == user_id,
                    UserCategoryMapping.description_pattern == pattern,
                    UserCategoryMapping.deleted_at.is_(None),
                )
            )
            return result.scalar_one_or_none()

    async def create_or_update(self, mapping: UserCategoryMapping) -> None:
        """Upsert on the (user_id, description_pattern) unique constraint.

        The database resolves concurrent corrections for the same pattern, so
        there is never more than one row per pair.
        """
        now = utcnow()
        stmt = insert(UserCategoryMapping).values(
            id=mapping.id or uuid4(),
            user_id=mapping.user_id,
            description_pattern=mapping.description_pattern,
            category_id=mapping.category_id,
            confidence=mapping.confidence,
            usage_count=mapping.usage_count,
            last_used_at=mapping.last_used_at or now,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            constraint="uq_user_mapping_user_pattern",
            set_={
                "category_id": stmt.excluded.category_id,
                "confidence": stmt.excluded.confidence,
                "usage_count": stmt.excluded.usage_count,
                "last_used_at": stmt.excluded.last_used_at,
                "updated_at": stmt.excluded.updated_at,
                "deleted_at": None,
            },
        )
        async with self._session("upsert_user_mapping") as session:
            await session.execute(stmt)
            await session.commit()

    async def update_last_used(self, mapping_id: UUID) -> None:
        """Refresh last_used_at and bump usage_count."""
        now = utcnow()
        async with self._session("update_last_used") as session:
            await session.execute(
                update(UserCategoryMapping)
                .where(UserCategoryMapping.id == mapping_id)
                .values(
                    last_used_at=now,
                    usage_count=UserCategoryMapping.usage_count + 1,
                    updated_at=now,
                )
            )
            await session.commit()
