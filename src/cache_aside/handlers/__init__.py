"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .record_handler import STATUS_BY_ERROR, RecordHandler, status_for

__all__ = [
    "RecordHandler",
    "STATUS_BY_ERROR",
    "status_for",
]
