"""Transaction categorization orchestrator.

Strategies are evaluated strictly in this order, stopping at the first hit:

1. User history (confidence 95). A user's own correction always beats
   generic rules, even a 100% merchant rule.
2. Merchant rules (confidence up to 100, first matching rule wins).
3. Keywords (confidence ~70-90, best of all matching keywords wins).

This is a priority chain, not a "highest score wins" merge.
"""

from __future__ import annotations

import logging
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from txn_categorizer.categorization.cache import (
    CategorizationCache,
    PreparedKeyword,
    PreparedRule,
    prepare_keywords,
    prepare_rules,
)
from txn_categorizer.categorization.matchers import (
    USER_HISTORY_CONFIDENCE,
    match_keywords,
    match_merchant,
    match_user_history,
)
from txn_categorizer.categorization.normalize import normalize_description
from txn_categorizer.categorization.usage import UsageTracker
from txn_categorizer.config import settings
from txn_categorizer.core.exceptions import (
    CacheLoadError,
    CorrectionError,
    InvalidCorrectionError,
    StoreError,
)
from txn_categorizer.models.base import utcnow
from txn_categorizer.models.user_mapping import UserCategoryMapping
from txn_categorizer.repositories import (
    KeywordRepository,
    KeywordStore,
    MerchantRuleRepository,
    MerchantRuleStore,
    UserMappingRepository,
    UserMappingStore,
)
from txn_categorizer.schemas.suggestion import CategorySuggestion, SuggestionSource

logger = logging.getLogger(__name__)


class Categorizer:
    """Suggests categories from merchant rules, keywords and per-user learning.

    Lifecycle: a new instance is *uninitialized* and queries the stores on
    every call. ``load_cache()`` moves it to *ready*, after which merchant
    rules and keywords come from an in-memory snapshot. ``load_cache()`` can
    be called again at any time to refresh.
    """

    def __init__(
        self,
        merchant_repo: MerchantRuleStore,
        keyword_repo: KeywordStore,
        user_mapping_repo: UserMappingStore,
        region: str = "VN",
        usage_tracker: UsageTracker | None = None,
    ):
        self.merchant_repo = merchant_repo
        self.keyword_repo = keyword_repo
        self.user_mapping_repo = user_mapping_repo
        self.region = region
        self.usage = usage_tracker or UsageTracker()
        self._cache: CategorizationCache | None = None

    @classmethod
    def from_session_factory(
        cls,
        session_factory: async_sessionmaker[AsyncSession],
        region: str | None = None,
    ) -> Categorizer:
        """Wire a categorizer to the SQLAlchemy repositories."""
        return cls(
            merchant_repo=MerchantRuleRepository(session_factory),
            keyword_repo=KeywordRepository(session_factory),
            user_mapping_repo=UserMappingRepository(session_factory),
            region=region or settings.categorization_region,
            usage_tracker=UsageTracker(max_pending=settings.usage_tracking_max_pending),
        )

    @property
    def cache(self) -> CategorizationCache | None:
        return self._cache

    @property
    def is_ready(self) -> bool:
        return self._cache is not None

    async def load_cache(self) -> CategorizationCache:
        """Load active merchant rules and keywords into a fresh snapshot.

        The snapshot is only published once both lists loaded, so a failure
        or cancellation keeps the previous snapshot (or none) in place.

        Raises:
            CacheLoadError: CACHE_001 for merchant rules, CACHE_002 for keywords.
        """
        try:
            rules = await self.merchant_repo.list_active(self.region)
        except Exception as e:
            raise CacheLoadError("CACHE_001", {"region": self.region}) from e

        try:
            keywords = await self.keyword_repo.list_active()
        except Exception as e:
            raise CacheLoadError("CACHE_002", {"region": self.region}) from e

        snapshot = CategorizationCache.build(self.region, rules, keywords)
        self._cache = snapshot
        logger.info(
            "Categorization cache loaded",
            extra={
                "region": self.region,
                "rules_count": len(snapshot.rules),
                "keywords_count": len(snapshot.keywords),
            },
        )
        return snapshot

    async def suggest_category(self, user_id: int, description: str) -> CategorySuggestion | None:
        """Suggest a category for a transaction description.

        Returns None when nothing matches. A store failure inside a single
        strategy only disables that strategy for this call.

        Raises:
            StoreError: when every strategy was unavailable because of store
                failures, so "no suggestion" could not be established.
        """
        normalized = normalize_description(description)
        if not normalized:
            return None

        failures = 0

        mappings = await self._user_mappings(user_id)
        if mappings is None:
            failures += 1
        else:
            suggestion = match_user_history(normalized, mappings)
            if suggestion is not None:
                self._record_usage(suggestion)
                return suggestion

        rules = await self._merchant_rules()
        if rules is None:
            failures += 1
        else:
            suggestion = match_merchant(normalized, rules)
            if suggestion is not None:
                self._record_usage(suggestion)
                return suggestion

        keywords = await self._keywords()
        if keywords is None:
            failures += 1
        else:
            suggestion = match_keywords(normalized, keywords)
            if suggestion is not None:
                return suggestion

        if failures == 3:
            raise StoreError("suggest_category", {"user_id": user_id})
        return None

    async def learn_from_correction(
        self, user_id: int, description: str, category_id: int
    ) -> UserCategoryMapping:
        """Remember that this user files this description under ``category_id``.

        An existing mapping for the same normalized description is updated in
        place (category replaced, usage_count incremented); otherwise a new
        mapping is created with usage_count 1. Confidence is always 95.

        Raises:
            InvalidCorrectionError: the description is blank after normalization.
            CorrectionError: the lookup or the write failed. Never swallowed.
        """
        pattern = normalize_description(description)
        if not pattern:
            raise InvalidCorrectionError("LEARN_002", {"user_id": user_id})

        mapping = UserCategoryMapping(
            id=uuid4(),
            user_id=user_id,
            description_pattern=pattern,
            category_id=category_id,
            confidence=USER_HISTORY_CONFIDENCE,
            usage_count=1,
            last_used_at=utcnow(),
        )

        try:
            existing = await self.user_mapping_repo.get_by_user_id_and_pattern(user_id, pattern)
            if existing is not None:
                mapping.id = existing.id
                mapping.usage_count = existing.usage_count + 1
            await self.user_mapping_repo.create_or_update(mapping)
        except Exception as e:
            logger.error(
                "Failed to persist category correction",
                extra={"user_id": user_id, "category_id": category_id, "error_code": "LEARN_001"},
            )
            raise CorrectionError(
                "LEARN_001", {"user_id": user_id, "category_id": category_id}
            ) from e

        logger.info(
            "Learned category correction",
            extra={"user_id": user_id, "category_id": category_id, "mapping_id": mapping.id},
        )
        return mapping

    async def close(self, wait: bool = True) -> None:
        """Finish (or cancel) in-flight usage updates."""
        if wait:
            await self.usage.drain()
        else:
            self.usage.cancel_all()

    async def _user_mappings(self, user_id: int) -> list[UserCategoryMapping] | None:
        try:
            return await self.user_mapping_repo.list_by_user_id(user_id)
        except Exception as e:
            logger.warning(
                "User mappings unavailable, skipping user history: %s",
                e,
                extra={"user_id": user_id, "source": SuggestionSource.user_history.value},
            )
            return None

    async def _merchant_rules(self) -> tuple[PreparedRule, ...] | None:
        cache = self._cache
        if cache is not None:
            return cache.rules
        try:
            return prepare_rules(await self.merchant_repo.list_active(self.region))
        except Exception as e:
            logger.warning(
                "Merchant rules unavailable, skipping merchant matching: %s",
                e,
                extra={"region": self.region, "source": SuggestionSource.merchant.value},
            )
            return None

    async def _keywords(self) -> tuple[PreparedKeyword, ...] | None:
        cache = self._cache
        if cache is not None:
            return cache.keywords
        try:
            return prepare_keywords(await self.keyword_repo.list_active())
        except Exception as e:
            logger.warning(
                "Keywords unavailable, skipping keyword matching: %s",
                e,
                extra={"source": SuggestionSource.keyword.value},
            )
            return None

    def _record_usage(self, suggestion: CategorySuggestion) -> None:
        source_id = suggestion.source_id
        if source_id is None:
            return
        if suggestion.source == SuggestionSource.user_history:
            self.usage.dispatch(
                lambda: self.user_mapping_repo.update_last_used(source_id),
                "update_last_used",
                mapping_id=source_id,
            )
        elif suggestion.source == SuggestionSource.merchant:
            self.usage.dispatch(
                lambda: self.merchant_repo.increment_usage_count(source_id),
                "increment_usage_count",
                rule_id=source_id,
            )
