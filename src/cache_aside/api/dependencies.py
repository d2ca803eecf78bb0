"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Store, cache, service and handler are built once in lifespan
    - Dependency functions retrieve them from request.app.state
    - Clean separation, no global mutable client handles
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from cache_aside.config import Settings, get_settings
from cache_aside.errors import CacheError
from cache_aside.handlers import RecordHandler
from cache_aside.logging_config import configure_logging, get_logger
from cache_aside.protocols import SnapshotCache
from cache_aside.repositories import PostgresRecordRepository, RedisSnapshotCache
from cache_aside.services import CacheAsideService

logger = get_logger(__name__)


def get_handler(request: Request) -> RecordHandler:
    """Dependency injection for RecordHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "handler", None)
    if handler is None:
        raise RuntimeError("RecordHandler not initialized. Check lifespan setup.")
    return handler


async def connect_cache(settings: Settings) -> SnapshotCache | None:
    """Connect the Redis snapshot cache if it is configured.

    A cache that cannot be reached at startup is left out, the service
    then runs against the store only.
    """
    if not settings.cache_enabled:
        logger.warning("Redis disabled (only active in production with a valid REDIS_URL)")
        return None

    try:
        cache = await RedisSnapshotCache.connect(settings)
    except CacheError as e:
        logger.error("Redis connection error, running without cache", error=e.message)
        return None

    logger.info("Connected to Redis")
    return cache


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Store (PostgreSQL) - schema ensured once at startup
    2. Cache (Redis) - optional
    3. Service (business logic) - stored in app.state.service
    4. Handler (HTTP endpoints) - stored in app.state.handler

    Cleanup:
        Closes the cache and the connection pool, removes state on shutdown.
        The pool is also closed when startup fails after connecting.
    """
    settings = get_settings()
    configure_logging(settings)

    repository = await PostgresRecordRepository.connect(settings)
    try:
        await repository.ensure_schema()

        service = CacheAsideService(
            store=repository,
            cache=await connect_cache(settings),
            cache_key=settings.cache_key,
            ttl=settings.cache_ttl,
        )
        app.state.repository = repository
        app.state.service = service
        app.state.handler = RecordHandler(service=service)

        logger.info("Service initialized", cache_enabled=service.cache_enabled, ttl=service.ttl)
        try:
            yield
        finally:
            await service.close()
            del app.state.handler
            del app.state.service
            del app.state.repository
    finally:
        await repository.close()
        logger.info("Service shut down")


# Type alias for cleaner dependency injection
HandlerDep = Annotated[RecordHandler, Depends(get_handler)]
