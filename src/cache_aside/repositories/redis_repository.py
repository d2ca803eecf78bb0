"""Redis implementation of SnapshotCache.

Stores the serialized snapshot as a plain string with SETEX. Errors are
translated, never swallowed: FailOpenCache decides what to do with them.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from cache_aside.config import Settings, create_redis_client
from cache_aside.errors import CacheError, CacheUnavailable


@contextmanager
def _cache_errors(operation: str) -> Iterator[None]:
    """Translate redis failures into CacheUnavailable / CacheError."""
    try:
        yield
    except (RedisConnectionError, RedisTimeoutError, OSError) as e:
        raise CacheUnavailable(
            f"Redis transport failed during {operation}",
            details={"operation": operation, "error": str(e)},
        ) from e
    except RedisError as e:
        raise CacheError(
            f"Redis rejected {operation}",
            details={"operation": operation, "error": str(e)},
        ) from e
    except UnicodeDecodeError as e:
        # decode_responses=True: a non-UTF-8 value fails inside the client
        raise CacheError(
            f"Redis returned undecodable data during {operation}",
            details={"operation": operation, "error": str(e)},
        ) from e


class RedisSnapshotCache:
    """Redis snapshot cache.

    This class satisfies the SnapshotCache protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, redis_client: redis.Redis) -> None:
        """Initialize the Redis snapshot cache.

        Args:
            redis_client: asyncio Redis client created with decode_responses=True
        """
        self._client = redis_client

    @classmethod
    async def connect(cls, settings: Settings) -> "RedisSnapshotCache":
        """Factory method that creates the client and checks the connection.

        Args:
            settings: Application settings with the REDIS_URL

        Returns:
            Connected RedisSnapshotCache

        Raises:
            CacheUnavailable: if Redis cannot be reached
        """
        cache = cls(create_redis_client(settings))
        try:
            with _cache_errors("connect"):
                await cache.client.ping()
        except CacheError:
            await cache.client.aclose()
            raise
        return cache

    async def get(self, key: str) -> str | None:
        """Get the snapshot stored under key.

        Args:
            key: The cache key

        Returns:
            The serialized snapshot, or None on a miss
        """
        with _cache_errors("get"):
            return await self._client.get(key)

    async def set(self, key: str, snapshot: str, ttl: int) -> None:
        """Store the snapshot under key with an expiry.

        Args:
            key: The cache key
            snapshot: Serialized snapshot
            ttl: Time-to-live in seconds
        """
        with _cache_errors("set"):
            await self._client.setex(key, ttl, snapshot)

    async def delete(self, key: str) -> None:
        """Delete key if present."""
        with _cache_errors("delete"):
            await self._client.delete(key)

    async def ping(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except (RedisError, OSError):
            return False

    async def close(self) -> None:
        """Close the Redis connection pool."""
        with _cache_errors("close"):
            await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
