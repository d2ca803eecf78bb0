"""Snapshot cache protocol.

Defines the interface for the optional key-value cache that holds a
serialized snapshot of all records under a single key.

Implementations can include:
- Redis (default, production only)
- NullSnapshotCache (no cache configured, or cache disabled after a fault)
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class SnapshotCache(Protocol):
    """Protocol for best-effort snapshot caches.

    Implementations backed by a network transport raise CacheUnavailable
    on connection faults and CacheError on any other failure. Callers wrap
    them in FailOpenCache so nothing ever reaches the request.
    """

    async def get(self, key: str) -> str | None:
        """Return the serialized snapshot stored under key, or None on a miss."""
        ...

    async def set(self, key: str, snapshot: str, ttl: int) -> None:
        """Store a serialized snapshot under key for ttl seconds."""
        ...

    async def delete(self, key: str) -> None:
        """Remove key. Deleting a missing key is not an error."""
        ...

    async def ping(self) -> bool:
        """Check if the cache is reachable."""
        ...

    async def close(self) -> None:
        """Release the underlying transport."""
        ...
