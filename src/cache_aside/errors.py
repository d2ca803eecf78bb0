"""Error taxonomy for the users service.

Store errors propagate to the HTTP layer; cache errors never leave the
service layer.
"""

from typing import Any


class RecordServiceError(Exception):
    """Base exception for the users service."""

    code = "RECORD_SERVICE_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(RecordServiceError):
    """A required field is missing or empty (client fault)."""

    code = "VALIDATION_ERROR"


class ConstraintViolation(RecordServiceError):
    """A unique constraint was violated, e.g. a duplicate email."""

    code = "CONSTRAINT_VIOLATION"


class StoreUnavailable(RecordServiceError):
    """The backing store failed to connect or to run a query."""

    code = "STORE_UNAVAILABLE"


class CacheError(RecordServiceError):
    """The cache rejected an operation."""

    code = "CACHE_ERROR"


class CacheUnavailable(CacheError):
    """The cache transport failed. Disables the cache for the process."""

    code = "CACHE_UNAVAILABLE"
