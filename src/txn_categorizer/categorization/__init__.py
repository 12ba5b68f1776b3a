"""Transaction categorization engine.

Suggests a category for a raw transaction description from three sources,
in strict priority order: the user's own past corrections, curated merchant
rules, and generic bilingual keywords.
"""

from .cache import CategorizationCache
from .categorizer import Categorizer
from .normalize import normalize_description
from .usage import UsageTracker

__all__ = ["CategorizationCache", "Categorizer", "UsageTracker", "normalize_description"]
