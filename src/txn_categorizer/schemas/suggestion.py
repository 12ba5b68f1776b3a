"""Categorization output schemas.

A suggestion is a value handed back to the caller; it is never persisted by
the engine. "No suggestion" is represented by ``None``, not by a suggestion
with a low confidence.
"""

import enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SuggestionSource(str, enum.Enum):
    """Which strategy produced a suggestion."""

    user_history = "user_history"
    merchant = "merchant"
    keyword = "keyword"


class CategorySuggestion(BaseModel):
    """Suggested category with confidence score and human-readable reason."""

    model_config = ConfigDict(frozen=True)

    category_id: int = Field(..., description="Opaque id from the category store")
    confidence: int = Field(..., ge=0, le=100, description="Trust in the suggestion, 0-100")
    reason: str = Field(..., description='Provenance, e.g. "Merchant: Highlands Coffee"')
    source: SuggestionSource = Field(..., description="Strategy that produced the match")
    source_id: UUID | None = Field(
        None, description="Id of the matched rule, keyword or user mapping"
    )
