"""Value objects returned by the categorization engine."""
from txn_categorizer.schemas.suggestion import CategorySuggestion, SuggestionSource

__all__ = ["CategorySuggestion", "SuggestionSource"]
