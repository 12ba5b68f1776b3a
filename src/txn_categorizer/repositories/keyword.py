"""Category keyword repository."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from txn_categorizer.models.category_keyword import CategoryKeyword
from txn_categorizer.repositories.base import BaseRepository


class KeywordRepository(BaseRepository[CategoryKeyword]):
    """Repository for CategoryKeyword."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(session_factory, CategoryKeyword)

    async def list_active(self) -> list[CategoryKeyword]:
        """All active keywords, highest confidence first."""
        async with self._session("list_active_keywords") as session:
            result = await session.execute(
                select(CategoryKeyword)
                .where(
                    CategoryKeyword.is_active.is_(True),
                    CategoryKeyword.deleted_at.is_(None),
                )
                .order_by(CategoryKeyword.confidence.desc())
            )
            return list(result.scalars().all())
