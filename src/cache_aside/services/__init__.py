"""Service layer for business logic.

This layer contains the cache-aside consistency protocol.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from cache_aside.services import CacheAsideService

    service = CacheAsideService(store=repository, cache=redis_cache)
    ```
"""

from .cache_aside_service import CacheAsideService
from .fail_open_cache import FailOpenCache
from .snapshot import decode_snapshot, encode_snapshot

__all__ = [
    "CacheAsideService",
    "FailOpenCache",
    "decode_snapshot",
    "encode_snapshot",
]
