"""Merchant rule repository."""
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from txn_categorizer.models.base import utcnow
from txn_categorizer.models.merchant_rule import MerchantCategoryRule
from txn_categorizer.repositories.base import BaseRepository


class MerchantRuleRepository(BaseRepository[MerchantCategoryRule]):
    """Repository for MerchantCategoryRule with region-scoped listing."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(session_factory, MerchantCategoryRule)

    async def list_active(self, region: str) -> list[MerchantCategoryRule]:
        """Active rules for a region, most confident and most used first."""
        async with self._session("list_active_merchant_rules") as session:
            result = await session.execute(
                select(MerchantCategoryRule)
                .where(
                    MerchantCategoryRule.region == region,
                    MerchantCategoryRule.is_active.is_(True),
                    MerchantCategoryRule.deleted_at.is_(None),
                )
                .order_by(
                    MerchantCategoryRule.confidence.desc(),
                    MerchantCategoryRule.usage_count.desc(),
                )
            )
            return list(result.scalars().all())

    async def increment_usage_count(self, rule_id: UUID) -> None:
        """Atomically bump usage_count for a rule."""
        async with self._session("increment_usage_count") as session:
            await session.execute(
                update(MerchantCategoryRule)
                .where(MerchantCategoryRule.id == rule_id)
                .values(
                    usage_count=MerchantCategoryRule.usage_count + 1,
                    updated_at=utcnow(),
                )
            )
            await session.commit()
