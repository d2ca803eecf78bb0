"""Record store protocol.

Defines the interface for the authoritative repository of user records.
The store owns the canonical data and enforces the uniqueness of emails.

Implementations can include:
- PostgreSQL via asyncpg (default)
- In-memory fakes for unit tests
"""

from typing import Protocol, runtime_checkable

from cache_aside.entities import Record


@runtime_checkable
class RecordStore(Protocol):
    """Protocol for the backing store of user records.

    Any type that implements these coroutines satisfies the protocol,
    no explicit inheritance needed.

    Example:
        ```python
        from cache_aside.protocols import RecordStore

        store: RecordStore = PostgresRecordRepository(pool)
        ```
    """

    async def list_all(self) -> list[Record]:
        """Return every record in insertion order.

        Raises:
            StoreUnavailable: if the query fails
        """
        ...

    async def insert(self, name: str, email: str) -> Record:
        """Insert a new record and return it with its assigned id.

        Raises:
            ValidationError: if name or email is empty
            ConstraintViolation: if the email already exists
            StoreUnavailable: if the query fails
        """
        ...

    async def update(self, record_id: int, name: str, email: str) -> bool:
        """Overwrite name and email of an existing record.

        Returns:
            True if a row was updated, False if the id does not exist
        """
        ...

    async def delete(self, record_id: int) -> bool:
        """Delete a record.

        Returns:
            True if a row was deleted, False if the id does not exist
        """
        ...

    async def ensure_schema(self) -> None:
        """Create the users table if it is missing. Never drops data."""
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
