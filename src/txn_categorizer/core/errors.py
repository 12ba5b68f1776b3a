"""Error codes and messages for the categorization engine.

Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- retry_allowed: Whether the failed operation can simply be retried
"""

from dataclasses import dataclass


@dataclass
class ErrorDefinition:
    """Definition of a single error type."""

    code: str
    message: str
    retry_allowed: bool


ERROR_CATALOG: dict[str, ErrorDefinition] = {
    "STORE_001": ErrorDefinition(
        code="STORE_001",
        message="Categorization store operation failed",
        retry_allowed=True,
    ),
    "CACHE_001": ErrorDefinition(
        code="CACHE_001",
        message="Failed to load merchant rules into the categorization cache",
        retry_allowed=True,
    ),
    "CACHE_002": ErrorDefinition(
        code="CACHE_002",
        message="Failed to load keywords into the categorization cache",
        retry_allowed=True,
    ),
    "LEARN_001": ErrorDefinition(
        code="LEARN_001",
        message="Failed to persist user category correction",
        retry_allowed=True,
    ),
    "LEARN_002": ErrorDefinition(
        code="LEARN_002",
        message="Correction description is empty after normalization",
        retry_allowed=False,
    ),
}

_UNKNOWN = ErrorDefinition(
    code="UNKNOWN",
    message="Unknown categorization error",
    retry_allowed=False,
)


def get_error(error_code: str) -> ErrorDefinition:
    """Get error definition by code.

    Unknown codes resolve to a generic, non-retryable definition instead of
    raising, so error reporting itself never fails.
    """
    return ERROR_CATALOG.get(error_code, _UNKNOWN)


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable."""
    return get_error(error_code).retry_allowed
