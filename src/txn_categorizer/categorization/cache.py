"""Immutable snapshot of merchant rules and keywords.

A ``Categorizer`` publishes a new snapshot by swapping a single reference,
so a concurrent ``suggest_category`` sees either the old snapshot or the new
one, never a mix. Snapshots are never mutated after construction.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from txn_categorizer.categorization.normalize import normalize_description, remove_diacritics
from txn_categorizer.models.base import utcnow
from txn_categorizer.models.category_keyword import CategoryKeyword
from txn_categorizer.models.enums import MatchType
from txn_categorizer.models.merchant_rule import MerchantCategoryRule

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 0
MAX_CONFIDENCE = 100


@dataclass(frozen=True)
class PreparedRule:
    """A merchant rule with its pattern normalized (and compiled, for regex rules)."""

    rule: MerchantCategoryRule
    pattern: str
    regex: re.Pattern[str] | None = None

    def matches(self, description: str) -> bool:
        match_type = self.rule.match_type
        if match_type == MatchType.exact:
            return description == self.pattern
        if match_type == MatchType.prefix:
            return description.startswith(self.pattern)
        if match_type == MatchType.suffix:
            return description.endswith(self.pattern)
        if match_type == MatchType.contains:
            return self.pattern in description
        if match_type == MatchType.regex:
            # A malformed regex never matches.
            return self.regex is not None and self.regex.search(description) is not None
        return False


@dataclass(frozen=True)
class PreparedKeyword:
    """A keyword with its text normalized."""

    keyword: CategoryKeyword
    text: str


def _is_live(row: MerchantCategoryRule | CategoryKeyword) -> bool:
    return bool(row.is_active) and row.deleted_at is None


def _confidence_in_range(confidence: int | None) -> bool:
    return confidence is not None and MIN_CONFIDENCE <= confidence <= MAX_CONFIDENCE


def prepare_rules(rules: Iterable[MerchantCategoryRule]) -> tuple[PreparedRule, ...]:
    """Normalize rule patterns, preserving store order.

    Inactive, deleted and blank-pattern rules are dropped, and so are rules
    whose confidence falls outside 0-100. Regex patterns are compiled with
    their diacritics removed, case-insensitively. A pattern that does not
    compile is kept (it simply never matches) and logged so an administrator
    can fix it.
    """
    prepared: list[PreparedRule] = []
    for rule in rules:
        if not _is_live(rule):
            continue
        pattern = normalize_description(rule.merchant_pattern)
        if not pattern:
            logger.warning("Skipping merchant rule with blank pattern", extra={"rule_id": rule.id})
            continue
        if not _confidence_in_range(rule.confidence):
            logger.warning(
                "Skipping merchant rule with out-of-range confidence %s",
                rule.confidence,
                extra={"rule_id": rule.id},
            )
            continue

        regex = None
        if rule.match_type == MatchType.regex:
            try:
                regex = re.compile(remove_diacritics(rule.merchant_pattern), re.IGNORECASE)
            except re.error as e:
                logger.warning(
                    "Merchant rule has an invalid regex and will never match: %s",
                    e,
                    extra={"rule_id": rule.id},
                )
        prepared.append(PreparedRule(rule=rule, pattern=pattern, regex=regex))
    return tuple(prepared)


def prepare_keywords(keywords: Iterable[CategoryKeyword]) -> tuple[PreparedKeyword, ...]:
    """Normalize keyword text, preserving store order.

    Inactive, deleted and blank keywords are dropped, as are keywords whose
    confidence falls outside 0-100.
    """
    prepared: list[PreparedKeyword] = []
    for keyword in keywords:
        if not _is_live(keyword):
            continue
        if not _confidence_in_range(keyword.confidence):
            logger.warning(
                "Skipping keyword with out-of-range confidence %s",
                keyword.confidence,
                extra={"keyword_id": keyword.id},
            )
            continue
        text = normalize_description(keyword.keyword)
        if text:
            prepared.append(PreparedKeyword(keyword=keyword, text=text))
    return tuple(prepared)


@dataclass(frozen=True)
class CategorizationCache:
    """In-memory rules and keywords for one region."""

    region: str
    rules: tuple[PreparedRule, ...]
    keywords: tuple[PreparedKeyword, ...]
    loaded_at: datetime = field(default_factory=utcnow)

    @classmethod
    def build(
        cls,
        region: str,
        rules: Iterable[MerchantCategoryRule],
        keywords: Iterable[CategoryKeyword],
    ) -> CategorizationCache:
        return cls(region=region, rules=prepare_rules(rules), keywords=prepare_keywords(keywords))
