"""No-op SnapshotCache used when no cache is configured or after it was disabled."""


class NullSnapshotCache:
    """Cache that never stores anything. Every get is a miss."""

    async def get(self, key: str) -> str | None:
        return None

    async def set(self, key: str, snapshot: str, ttl: int) -> None:
        return None

    async def delete(self, key: str) -> None:
        return None

    async def ping(self) -> bool:
        return False

    async def close(self) -> None:
        return None
