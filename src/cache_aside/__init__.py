"""Cache-aside users service - PostgreSQL CRUD with an optional Redis snapshot cache.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (RecordStore, SnapshotCache)
    - repositories: Data access implementations (PostgreSQL, Redis, null cache)
    - services: Cache-aside consistency protocol
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from cache_aside.services import CacheAsideService

    service = CacheAsideService(store=repository)               # store only
    service = CacheAsideService(store=repository, cache=cache)  # cache-aside
    ```

For HTTP API:
    ```python
    from cache_aside.api.app import app
    ```
"""

from cache_aside.config import Settings, get_settings
from cache_aside.dto import RecordItem, RecordPayload
from cache_aside.entities import Record
from cache_aside.errors import (
    CacheError,
    CacheUnavailable,
    ConstraintViolation,
    RecordServiceError,
    StoreUnavailable,
    ValidationError,
)
from cache_aside.handlers import RecordHandler
from cache_aside.protocols import RecordStore, SnapshotCache
from cache_aside.repositories import NullSnapshotCache, PostgresRecordRepository, RedisSnapshotCache
from cache_aside.services import CacheAsideService, FailOpenCache

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    # Errors
    "RecordServiceError",
    "ValidationError",
    "ConstraintViolation",
    "StoreUnavailable",
    "CacheError",
    "CacheUnavailable",
    # Protocols (interfaces)
    "RecordStore",
    "SnapshotCache",
    # Services (business logic)
    "CacheAsideService",
    "FailOpenCache",
    # Handlers (HTTP)
    "RecordHandler",
    # Repositories (data access)
    "PostgresRecordRepository",
    "RedisSnapshotCache",
    "NullSnapshotCache",
    # Entities (domain models)
    "Record",
    # DTOs (API contracts)
    "RecordPayload",
    "RecordItem",
]
