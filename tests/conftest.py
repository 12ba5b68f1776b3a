import sys
from pathlib import Path
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

sys.path.append(str(Path(__file__).parents[1] / "src"))

from txn_categorizer.categorization.categorizer import Categorizer
from txn_categorizer.categorization.usage import UsageTracker
from txn_categorizer.models.base import utcnow
from txn_categorizer.models.category_keyword import CategoryKeyword
from txn_categorizer.models.enums import Language, MatchType
from txn_categorizer.models.merchant_rule import MerchantCategoryRule
from txn_categorizer.models.user_mapping import UserCategoryMapping


# Column defaults only apply on INSERT, so the builders set every field the
# engine reads explicitly.
def make_rule(
    pattern: str,
    category_id: int,
    match_type: MatchType = MatchType.contains,
    confidence: int = 100,
    is_active: bool = True,
    region: str = "VN",
    usage_count: int = 0,
) -> MerchantCategoryRule:
    return MerchantCategoryRule(
        id=uuid4(),
        merchant_pattern=pattern,
        match_type=match_type,
        category_id=category_id,
        confidence=confidence,
        is_active=is_active,
        region=region,
        usage_count=usage_count,
        deleted_at=None,
    )


def make_keyword(
    keyword: str,
    category_id: int,
    confidence: int = 75,
    language: Language = Language.vietnamese,
    is_active: bool = True,
) -> CategoryKeyword:
    return CategoryKeyword(
        id=uuid4(),
        keyword=keyword,
        category_id=category_id,
        confidence=confidence,
        language=language,
        is_active=is_active,
        deleted_at=None,
    )


def make_mapping(
    user_id: int,
    pattern: str,
    category_id: int,
    usage_count: int = 1,
) -> UserCategoryMapping:
    return UserCategoryMapping(
        id=uuid4(),
        user_id=user_id,
        description_pattern=pattern,
        category_id=category_id,
        confidence=95,
        usage_count=usage_count,
        last_used_at=utcnow(),
        deleted_at=None,
    )


class InMemoryUserMappingStore:
    """User mapping store keyed by (user_id, description_pattern)."""

    def __init__(self, mappings: list[UserCategoryMapping] | None = None):
        self.mappings: dict[tuple[int, str], UserCategoryMapping] = {}
        self.last_used_calls: list[UUID] = []
        for mapping in mappings or []:
            self.mappings[(mapping.user_id, mapping.description_pattern)] = mapping

    async def list_by_user_id(self, user_id: int) -> list[UserCategoryMapping]:
        rows = [m for (uid, _), m in self.mappings.items() if uid == user_id]
        return sorted(rows, key=lambda m: m.usage_count, reverse=True)

    async def get_by_user_id_and_pattern(
        self, user_id: int, pattern: str
    ) -> UserCategoryMapping | None:
        return self.mappings.get((user_id, pattern))

    async def create_or_update(self, mapping: UserCategoryMapping) -> None:
        self.mappings[(mapping.user_id, mapping.description_pattern)] = mapping

    async def update_last_used(self, mapping_id: UUID) -> None:
        self.last_used_calls.append(mapping_id)


@pytest.fixture
def merchant_repo():
    repo = AsyncMock()
    repo.list_active = AsyncMock(return_value=[])
    repo.increment_usage_count = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def keyword_repo():
    repo = AsyncMock()
    repo.list_active = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def user_mapping_store():
    return InMemoryUserMappingStore()


@pytest.fixture
async def categorizer(merchant_repo, keyword_repo, user_mapping_store):
    """Uninitialized categorizer over mocked stores; pending usage updates are drained on teardown."""
    instance = Categorizer(
        merchant_repo=merchant_repo,
        keyword_repo=keyword_repo,
        user_mapping_repo=user_mapping_store,
        region="VN",
        usage_tracker=UsageTracker(max_pending=16),
    )
    yield instance
    await instance.close()
