"""The three matching strategies.

All functions here are pure: they take an already normalized description
plus the candidate rows and return a suggestion or ``None``. Fetching rows
and recording usage is the orchestrator's job.
"""

from collections.abc import Iterable

from txn_categorizer.categorization.cache import PreparedKeyword, PreparedRule
from txn_categorizer.categorization.normalize import normalize_description
from txn_categorizer.models.user_mapping import UserCategoryMapping
from txn_categorizer.schemas.suggestion import CategorySuggestion, SuggestionSource

# User history is trusted uniformly, whatever the stored confidence says.
USER_HISTORY_CONFIDENCE = 95
USER_HISTORY_REASON = "User history"


def match_user_history(
    description: str, mappings: Iterable[UserCategoryMapping]
) -> CategorySuggestion | None:
    """First mapping (in store order) whose pattern occurs in the description."""
    for mapping in mappings:
        pattern = normalize_description(mapping.description_pattern)
        if pattern and pattern in description:
            return CategorySuggestion(
                category_id=mapping.category_id,
                confidence=USER_HISTORY_CONFIDENCE,
                reason=USER_HISTORY_REASON,
                source=SuggestionSource.user_history,
                source_id=mapping.id,
            )
    return None


def match_merchant(
    description: str, rules: Iterable[PreparedRule]
) -> CategorySuggestion | None:
    """First rule (in cache order) whose pattern matches. First match wins."""
    for prepared in rules:
        if prepared.matches(description):
            rule = prepared.rule
            return CategorySuggestion(
                category_id=rule.category_id,
                confidence=rule.confidence,
                reason=f"Merchant: {rule.merchant_pattern}",
                source=SuggestionSource.merchant,
                source_id=rule.id,
            )
    return None


def match_keywords(
    description: str, keywords: Iterable[PreparedKeyword]
) -> CategorySuggestion | None:
    """Highest-confidence keyword contained in the description.

    Every keyword is evaluated; on equal confidence the first one seen wins.
    """
    best: PreparedKeyword | None = None
    for prepared in keywords:
        if prepared.text in description:
            if best is None or prepared.keyword.confidence > best.keyword.confidence:
                best = prepared

    if best is None:
        return None

    keyword = best.keyword
    return CategorySuggestion(
        category_id=keyword.category_id,
        confidence=keyword.confidence,
        reason=f"Keyword: {keyword.keyword}",
        source=SuggestionSource.keyword,
        source_id=keyword.id,
    )
