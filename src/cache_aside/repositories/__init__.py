"""Repository layer for data access.

This layer abstracts external dependencies (PostgreSQL, Redis) behind
protocol-based interfaces. This enables:
- Running without Redis (NullSnapshotCache) using the same service code
- Unit testing with in-memory implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from cache_aside.protocols import RecordStore, SnapshotCache

from .null_cache import NullSnapshotCache
from .postgres_repository import PostgresRecordRepository
from .redis_repository import RedisSnapshotCache

__all__ = [
    "RecordStore",
    "SnapshotCache",
    "NullSnapshotCache",
    "PostgresRecordRepository",
    "RedisSnapshotCache",
]
