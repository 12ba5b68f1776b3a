"""Transaction categorization engine."""

__version__ = "0.1.0"

from txn_categorizer.categorization import Categorizer, normalize_description
from txn_categorizer.schemas import CategorySuggestion, SuggestionSource

__all__ = ["Categorizer", "CategorySuggestion", "SuggestionSource", "normalize_description"]
