"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .record import Record, validate_record_fields

__all__ = ["Record", "validate_record_fields"]
