"""Fail-open wrapper around a SnapshotCache.

The wrapper starts enabled and moves one way to disabled on the first
transport fault. Once disabled it delegates to NullSnapshotCache for the
rest of the process lifetime: no reconnection, no recovery.
"""

from cache_aside.errors import CacheError, CacheUnavailable
from cache_aside.logging_config import get_logger
from cache_aside.protocols import SnapshotCache
from cache_aside.repositories import NullSnapshotCache

logger = get_logger(__name__)


class FailOpenCache:
    """SnapshotCache that never raises.

    - CacheUnavailable: logged, cache disabled permanently, call answered
      as a miss / no-op
    - CacheError: logged, call answered as a miss / no-op, cache stays enabled
    """

    def __init__(self, backend: SnapshotCache) -> None:
        self._backend: SnapshotCache = backend
        # Still closed on shutdown after a fault swapped out _backend
        self._transport = backend
        self._enabled = True

    @property
    def enabled(self) -> bool:
        """False once a transport fault disabled the cache."""
        return self._enabled

    def _disable(self, error: CacheUnavailable) -> None:
        logger.error(
            "Redis error, cache disabled for the rest of the process",
            error=error.message,
            details=error.details,
        )
        self._backend = NullSnapshotCache()
        self._enabled = False

    async def get(self, key: str) -> str | None:
        try:
            return await self._backend.get(key)
        except CacheUnavailable as e:
            self._disable(e)
        except CacheError as e:
            logger.warning("Cache read failed, treating as miss", key=key, error=e.message)
        return None

    async def set(self, key: str, snapshot: str, ttl: int) -> None:
        try:
            await self._backend.set(key, snapshot, ttl)
        except CacheUnavailable as e:
            self._disable(e)
        except CacheError as e:
            logger.warning("Cache fill failed", key=key, error=e.message)

    async def delete(self, key: str) -> None:
        # A failed delete can serve a stale snapshot until the TTL expires
        try:
            await self._backend.delete(key)
        except CacheUnavailable as e:
            self._disable(e)
        except CacheError as e:
            logger.error("Cache invalidation failed, snapshot may be stale until expiry", key=key, error=e.message)

    async def ping(self) -> bool:
        return self._enabled and await self._backend.ping()

    async def close(self) -> None:
        try:
            await self._transport.close()
        except CacheError as e:
            logger.warning("Cache close failed", error=e.message)
