"""Custom exception classes for the categorization engine.

Every exception carries an ``error_code`` that maps to the catalog in
errors.py. Only the hard failures live here: "no suggestion" is not an
error, and fire-and-forget usage updates never raise to callers.
"""

from typing import Any

from txn_categorizer.core.errors import get_error


class CategorizationError(Exception):
    """Base exception for all categorization engine errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "CACHE_001")
        details: Additional context about the error (for logging)
    """

    def __init__(self, error_code: str, details: dict[str, Any] | None = None):
        self.error_code = error_code
        self.details = details or {}
        super().__init__(get_error(error_code).message)

    @property
    def retry_allowed(self) -> bool:
        return get_error(self.error_code).retry_allowed


class StoreError(CategorizationError):
    """Raised by repositories when the underlying database call fails."""

    def __init__(self, operation: str, details: dict[str, Any] | None = None):
        self.operation = operation
        super().__init__("STORE_001", {"operation": operation, **(details or {})})


class CacheLoadError(CategorizationError):
    """Raised when merchant rules (CACHE_001) or keywords (CACHE_002) cannot be loaded.

    The previously published cache snapshot stays in place.
    """

    pass


class CorrectionError(CategorizationError):
    """Raised when a user's correction cannot be persisted (LEARN_001)."""

    pass


class InvalidCorrectionError(CorrectionError):
    """Raised when a correction has nothing to learn from (LEARN_002)."""

    pass
