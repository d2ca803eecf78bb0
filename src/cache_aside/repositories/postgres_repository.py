"""PostgreSQL implementation of RecordStore.

Uses an asyncpg connection pool. PostgreSQL serialises concurrent writes
per connection/transaction, so no application-level locking is added here.
"""

import asyncio
import ssl
from collections.abc import Iterator
from contextlib import contextmanager

import asyncpg

from cache_aside.config import Settings
from cache_aside.entities import Record, validate_record_fields
from cache_aside.errors import ConstraintViolation, StoreUnavailable
from cache_aside.logging_config import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS public.users (
        id SERIAL PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT UNIQUE NOT NULL
    );
"""


def _ssl_context(settings: Settings) -> ssl.SSLContext | bool:
    """SSL is only used in production, without certificate verification."""
    if not settings.is_production:
        return False

    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def _row_count(status: str) -> int:
    """Parse the affected row count from a command tag like 'UPDATE 1'."""
    try:
        return int(status.split()[-1])
    except (AttributeError, IndexError, ValueError):
        return 0


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Translate asyncpg failures into the service error taxonomy."""
    try:
        yield
    except asyncpg.UniqueViolationError as e:
        raise ConstraintViolation(
            "Email already exists",
            details={"operation": operation, "constraint": getattr(e, "constraint_name", None)},
        ) from e
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as e:
        logger.error("Store operation failed", operation=operation, error=str(e))
        raise StoreUnavailable(
            f"Store operation '{operation}' failed",
            details={"operation": operation, "error": str(e)},
        ) from e


class PostgresRecordRepository:
    """PostgreSQL repository for the public.users table.

    This class satisfies the RecordStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, pool: asyncpg.Pool) -> None:
        """Initialize the repository.

        Args:
            pool: An open asyncpg pool (or anything exposing fetch,
                fetchrow, fetchval and execute)
        """
        self._pool = pool

    @classmethod
    async def connect(cls, settings: Settings) -> "PostgresRecordRepository":
        """Factory method that opens the connection pool.

        Args:
            settings: Application settings with the DATABASE_URL

        Returns:
            Connected PostgresRecordRepository

        Raises:
            StoreUnavailable: if PostgreSQL cannot be reached
        """
        with _store_errors("connect"):
            pool = await asyncpg.create_pool(
                settings.database_url,
                ssl=_ssl_context(settings),
                min_size=1,
                max_size=10,
                command_timeout=30,
            )

        logger.info("Connected to PostgreSQL", ssl=settings.is_production)
        return cls(pool)

    async def close(self) -> None:
        """Close the connection pool."""
        await self._pool.close()
        logger.info("PostgreSQL pool closed")

    async def ensure_schema(self) -> None:
        """Create the users table if it does not exist."""
        with _store_errors("ensure_schema"):
            await self._pool.execute(SCHEMA_SQL)
        logger.info("Table is ready", table="public.users")

    async def list_all(self) -> list[Record]:
        """Return every record ordered by id."""
        with _store_errors("list_all"):
            rows = await self._pool.fetch("SELECT id, name, email FROM public.users ORDER BY id")
        return [Record(id=row["id"], name=row["name"], email=row["email"]) for row in rows]

    async def insert(self, name: str, email: str) -> Record:
        """Insert a record and return it with the id PostgreSQL assigned."""
        validate_record_fields(name, email)

        with _store_errors("insert"):
            row = await self._pool.fetchrow(
                "INSERT INTO public.users (name, email) VALUES ($1, $2) RETURNING id, name, email",
                name,
                email,
            )
        return Record(id=row["id"], name=row["name"], email=row["email"])

    async def update(self, record_id: int, name: str, email: str) -> bool:
        """Update name and email. A missing id is a no-op."""
        validate_record_fields(name, email)

        with _store_errors("update"):
            status = await self._pool.execute(
                "UPDATE public.users SET name = $1, email = $2 WHERE id = $3",
                name,
                email,
                record_id,
            )
        return _row_count(status) > 0

    async def delete(self, record_id: int) -> bool:
        """Delete a record. A missing id is a no-op."""
        with _store_errors("delete"):
            status = await self._pool.execute("DELETE FROM public.users WHERE id = $1", record_id)
        return _row_count(status) > 0

    async def health_check(self) -> bool:
        """Check if PostgreSQL is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return await self._pool.fetchval("SELECT 1") == 1
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError):
            return False
