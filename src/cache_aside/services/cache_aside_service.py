"""Cache-aside service for user records.

This service owns the consistency protocol between the authoritative
record store and the optional snapshot cache. It persists nothing itself.

Known race, accepted by design of cache-aside: a read that ran
``list_all`` before a write committed can ``set`` its snapshot after that
write's ``delete``. The stale snapshot then lives until the TTL expires.
"""

from cache_aside.config import get_settings
from cache_aside.entities import Record, validate_record_fields
from cache_aside.logging_config import get_logger
from cache_aside.protocols import RecordStore, SnapshotCache
from cache_aside.repositories import NullSnapshotCache

from .fail_open_cache import FailOpenCache
from .snapshot import decode_snapshot, encode_snapshot

logger = get_logger(__name__)


class CacheAsideService:
    """Core orchestration of reads and writes over store and cache.

    This service depends on PROTOCOLS, not concrete implementations:
    - RecordStore: PostgreSQL in production, in-memory in tests
    - SnapshotCache: Redis, or nothing at all

    The cache is always an object. Without a configured cache the service
    uses NullSnapshotCache; a configured cache is wrapped in FailOpenCache,
    which turns into a NullSnapshotCache after the first transport fault.

    Example:
        ```python
        from cache_aside.services import CacheAsideService

        service = CacheAsideService(store=repository)                      # no cache
        service = CacheAsideService(store=repository, cache=redis_cache)   # cache-aside
        records = await service.fetch_all()
        ```
    """

    def __init__(
        self,
        store: RecordStore,
        cache: SnapshotCache | None = None,
        cache_key: str | None = None,
        ttl: int | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            store: Authoritative record store (required).
            cache: Snapshot cache. None runs the service without caching.
            cache_key: Key of the single snapshot entry. Defaults to settings.
            ttl: Snapshot time-to-live in seconds. Defaults to settings.
        """
        self._store = store
        self._cache: FailOpenCache | NullSnapshotCache = (
            FailOpenCache(cache) if cache is not None else NullSnapshotCache()
        )
        self._key = cache_key or get_settings().cache_key
        self._ttl = ttl or get_settings().cache_ttl

    async def fetch_all(self, force_refresh: bool = False) -> list[Record]:
        """Return all records, from the cache when possible.

        Business logic:
        1. On force_refresh, bust the snapshot so the store is always read
        2. On a cache hit, return the snapshot without touching the store
        3. On a miss, read the store
        4. Fill the cache with the fresh snapshot (best-effort)
        5. Return the store result

        Args:
            force_refresh: Delete the cached snapshot before reading

        Returns:
            Records in store order

        Raises:
            StoreUnavailable: if the store read fails
        """
        if force_refresh:
            await self.refresh()

        snapshot = await self._cache.get(self._key)
        if snapshot is not None:
            try:
                records = decode_snapshot(snapshot)
            except ValueError as e:
                logger.warning("Discarding unreadable snapshot", key=self._key, error=str(e))
            else:
                logger.info("Data from cache", count=len(records))
                return records

        records = await self._store.list_all()
        await self._cache.set(self._key, encode_snapshot(records), self._ttl)
        logger.info("Data from store", count=len(records), cached=self.cache_enabled)
        return records

    async def create(self, name: str | None, email: str | None) -> Record:
        """Create a record and invalidate the snapshot.

        Raises:
            ValidationError: if name or email is missing, before any store call
            ConstraintViolation: if the email already exists
            StoreUnavailable: if the insert fails
        """
        validate_record_fields(name, email)
        record = await self._store.insert(name, email)
        await self._invalidate("create")
        return record

    async def update(self, record_id: int, name: str | None, email: str | None) -> bool:
        """Update a record and invalidate the snapshot.

        Updating a missing id is a no-op, not an error.

        Returns:
            True if a record was changed
        """
        validate_record_fields(name, email)
        updated = await self._store.update(record_id, name, email)
        await self._invalidate("update")
        return updated

    async def delete(self, record_id: int) -> bool:
        """Delete a record and invalidate the snapshot.

        Deleting a missing id is a no-op, not an error.

        Returns:
            True if a record was removed
        """
        deleted = await self._store.delete(record_id)
        await self._invalidate("delete")
        return deleted

    async def refresh(self) -> None:
        """Drop the cached snapshot without reading the store."""
        await self._cache.delete(self._key)
        logger.info("Cache cleared by refresh", key=self._key)

    async def _invalidate(self, operation: str) -> None:
        # Whole-collection granularity: one key holds everything
        await self._cache.delete(self._key)
        logger.debug("Snapshot invalidated", operation=operation, key=self._key)

    async def is_healthy(self) -> dict[str, bool]:
        """Check store and cache health.

        Returns:
            Dict with store and cache reachability
        """
        return {
            "store": await self._store.health_check(),
            "cache": await self._cache.ping(),
        }

    async def close(self) -> None:
        """Release the cache transport. The store is closed by its owner."""
        await self._cache.close()

    @property
    def cache_enabled(self) -> bool:
        """True while a configured cache has not been disabled by a fault."""
        return isinstance(self._cache, FailOpenCache) and self._cache.enabled

    @property
    def ttl(self) -> int:
        """Snapshot time-to-live in seconds."""
        return self._ttl

    @property
    def cache_key(self) -> str:
        """Key of the snapshot entry."""
        return self._key

    @property
    def store(self) -> RecordStore:
        """Get the underlying store (for testing)."""
        return self._store
