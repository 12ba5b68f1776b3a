"""Store capabilities the categorization engine depends on.

The engine only needs "something that can list active rules, keywords and
mappings and persist a mapping". The SQLAlchemy repositories in this package
satisfy these protocols; tests use in-memory or mocked stores.
"""

from typing import Protocol
from uuid import UUID

from txn_categorizer.models.category_keyword import CategoryKeyword
from txn_categorizer.models.merchant_rule import MerchantCategoryRule
from txn_categorizer.models.user_mapping import UserCategoryMapping


class MerchantRuleStore(Protocol):
    async def list_active(self, region: str) -> list[MerchantCategoryRule]: ...

    async def increment_usage_count(self, rule_id: UUID) -> None: ...


class KeywordStore(Protocol):
    async def list_active(self) -> list[CategoryKeyword]: ...


class UserMappingStore(Protocol):
    async def list_by_user_id(self, user_id: int) -> list[UserCategoryMapping]: ...

    async def get_by_user_id_and_pattern(
        self, user_id: int, pattern: str
    ) -> UserCategoryMapping | None: ...

    async def create_or_update(self, mapping: UserCategoryMapping) -> None: ...

    async def update_last_used(self, mapping_id: UUID) -> None: ...
