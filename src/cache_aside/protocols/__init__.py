"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Running with or without a cache behind the same service code
- Unit testing with in-memory implementations
- Clear separation of concerns

Usage:
    ```python
    from cache_aside.protocols import RecordStore, SnapshotCache

    store: RecordStore = PostgresRecordRepository(pool)
    cache: SnapshotCache = RedisSnapshotCache(client)
    ```
"""

from .record_store import RecordStore
from .snapshot_cache import SnapshotCache

__all__ = [
    "RecordStore",
    "SnapshotCache",
]
