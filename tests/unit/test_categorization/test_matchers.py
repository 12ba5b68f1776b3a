import logging

import pytest

from conftest import make_keyword, make_mapping, make_rule
from txn_categorizer.categorization.cache import prepare_keywords, prepare_rules
from txn_categorizer.categorization.matchers import (
    match_keywords,
    match_merchant,
    match_user_history,
)
from txn_categorizer.models.enums import MatchType
from txn_categorizer.schemas.suggestion import SuggestionSource


def _merchant(description, *rules):
    return match_merchant(description, prepare_rules(rules))


def _keyword(description, *keywords):
    return match_keywords(description, prepare_keywords(keywords))


@pytest.mark.parametrize(
    "match_type, pattern, description, expected",
    [
        (MatchType.exact, "Grab", "grab", True),
        (MatchType.exact, "Grab", "grab food", False),
        (MatchType.prefix, "Grab", "grab food hcm", True),
        (MatchType.prefix, "Grab", "thanh toan grab", False),
        (MatchType.suffix, "Shopee", "thanh toan shopee", True),
        (MatchType.suffix, "Shopee", "shopee mall", False),
        (MatchType.contains, "Circle K", "circle k le loi", True),
        (MatchType.contains, "Circle K", "ministop le loi", False),
        (MatchType.regex, r"^grab\s*(bike|car)$", "grabbike", True),
        (MatchType.regex, r"^grab\s*(bike|car)$", "grab food", False),
    ],
)
def test_merchant_match_types(match_type, pattern, description, expected):
    suggestion = _merchant(description, make_rule(pattern, 2, match_type=match_type))
    assert (suggestion is not None) is expected


def test_merchant_pattern_is_normalized():
    suggestion = _merchant("pho hoa pasteur q3", make_rule("Phở  Hòa", 1))

    assert suggestion is not None
    assert suggestion.category_id == 1


def test_merchant_regex_is_case_insensitive():
    assert _merchant("vinmart q7", make_rule("VINMART.*", 3, match_type=MatchType.regex)) is not None


def test_merchant_regex_matches_without_diacritics():
    rule = make_rule(r"^Phở\s+24", 5, match_type=MatchType.regex)

    assert _merchant("pho 24 le loi", rule).category_id == 5


def test_merchant_malformed_regex_never_matches(caplog):
    rule = make_rule("([unclosed", 3, match_type=MatchType.regex)

    with caplog.at_level(logging.WARNING):
        prepared = prepare_rules([rule])

    assert len(prepared) == 1
    assert prepared[0].regex is None
    assert match_merchant("([unclosed", prepared) is None
    assert "invalid regex" in caplog.text


def test_merchant_first_match_wins_over_confidence():
    first = make_rule("coffee", 1, confidence=80)
    second = make_rule("highlands coffee", 2, confidence=100)

    suggestion = _merchant("highlands coffee", first, second)

    assert suggestion.category_id == 1
    assert suggestion.confidence == 80


def test_merchant_suggestion_fields():
    rule = make_rule("Highlands Coffee", 1)

    suggestion = _merchant("highlands coffee phu my hung", rule)

    assert suggestion.confidence == 100
    assert suggestion.reason == "Merchant: Highlands Coffee"
    assert suggestion.source == SuggestionSource.merchant
    assert suggestion.source_id == rule.id


def test_merchant_skips_inactive_and_blank_rules():
    inactive = make_rule("grab", 1, is_active=False)
    blank = make_rule("   ", 2)

    assert prepare_rules([inactive, blank]) == ()
    assert _merchant("grab", inactive, blank) is None


def test_keywords_best_confidence_wins():
    suggestion = _keyword(
        "an trua com tam",
        make_keyword("an trua", 10, confidence=80),
        make_keyword("com", 11, confidence=85),
    )

    assert suggestion.category_id == 11
    assert suggestion.confidence == 85
    assert suggestion.reason == "Keyword: com"
    assert suggestion.source == SuggestionSource.keyword


def test_keywords_tie_keeps_first_seen():
    suggestion = _keyword(
        "grab xe om",
        make_keyword("xe", 20, confidence=80),
        make_keyword("xe om", 21, confidence=80),
    )

    assert suggestion.category_id == 20


def test_keywords_match_accented_keyword_text():
    suggestion = _keyword("mua ca phe sang", make_keyword("Cà Phê", 10, confidence=85))

    assert suggestion.category_id == 10
    assert suggestion.reason == "Keyword: Cà Phê"


def test_keywords_no_match():
    assert _keyword("chuyen khoan", make_keyword("luong", 30)) is None
    assert _keyword("anything") is None


def test_user_history_first_mapping_wins_with_fixed_confidence():
    first = make_mapping(1, "starbucks", 100)
    first.confidence = 40
    second = make_mapping(1, "starbucks vietnam", 200)

    suggestion = match_user_history("starbucks vietnam", [first, second])

    assert suggestion.category_id == 100
    assert suggestion.confidence == 95
    assert suggestion.reason == "User history"
    assert suggestion.source == SuggestionSource.user_history
    assert suggestion.source_id == first.id


def test_user_history_normalizes_stored_pattern():
    mapping = make_mapping(1, "Cà Phê  Sáng", 7)

    suggestion = match_user_history("mua ca phe sang", [mapping])

    assert suggestion.category_id == 7


def test_user_history_ignores_blank_patterns():
    mapping = make_mapping(1, "", 7)

    assert match_user_history("anything", [mapping]) is None
