"""
Shared fixtures: in-memory implementations of the store and cache protocols.
"""

from collections import Counter
from contextlib import asynccontextmanager

import pytest
from fastapi.testclient import TestClient

from cache_aside.api.app import create_app
from cache_aside.entities import Record, validate_record_fields
from cache_aside.errors import ConstraintViolation
from cache_aside.handlers import RecordHandler
from cache_aside.services import CacheAsideService


class InMemoryRecordStore:
    """RecordStore keeping records in insertion order with a unique email index."""

    def __init__(self) -> None:
        self.records: dict[int, Record] = {}
        self.calls: Counter[str] = Counter()
        self.fail_on: dict[str, Exception] = {}
        self.healthy = True
        self._next_id = 1

    def _enter(self, operation: str) -> None:
        self.calls[operation] += 1
        if operation in self.fail_on:
            raise self.fail_on[operation]

    def _email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        return any(r.email == email and r.id != exclude_id for r in self.records.values())

    async def list_all(self) -> list[Record]:
        self._enter("list_all")
        return list(self.records.values())

    async def insert(self, name: str, email: str) -> Record:
        self._enter("insert")
        validate_record_fields(name, email)
        if self._email_taken(email):
            raise ConstraintViolation("Email already exists")
        record = Record(id=self._next_id, name=name, email=email)
        self.records[record.id] = record
        self._next_id += 1
        return record

    async def update(self, record_id: int, name: str, email: str) -> bool:
        self._enter("update")
        validate_record_fields(name, email)
        if record_id not in self.records:
            return False
        if self._email_taken(email, exclude_id=record_id):
            raise ConstraintViolation("Email already exists")
        self.records[record_id] = Record(id=record_id, name=name, email=email)
        return True

    async def delete(self, record_id: int) -> bool:
        self._enter("delete")
        return self.records.pop(record_id, None) is not None

    async def ensure_schema(self) -> None:
        self._enter("ensure_schema")

    async def health_check(self) -> bool:
        return self.healthy


class InMemorySnapshotCache:
    """SnapshotCache backed by a dict. TTLs are recorded, not enforced."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.calls: Counter[str] = Counter()
        self.fail_on: dict[str, Exception] = {}
        self.closed = False

    def _enter(self, operation: str) -> None:
        self.calls[operation] += 1
        if operation in self.fail_on:
            raise self.fail_on[operation]

    async def get(self, key: str) -> str | None:
        self._enter("get")
        return self.data.get(key)

    async def set(self, key: str, snapshot: str, ttl: int) -> None:
        self._enter("set")
        self.data[key] = snapshot
        self.ttls[key] = ttl

    async def delete(self, key: str) -> None:
        self._enter("delete")
        self.data.pop(key, None)
        self.ttls.pop(key, None)

    async def ping(self) -> bool:
        self._enter("ping")
        return True

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def store():
    """Empty in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture
def cache():
    """Empty in-memory snapshot cache."""
    return InMemorySnapshotCache()


@pytest.fixture
def service(store, cache):
    """Service with a cache."""
    return CacheAsideService(store=store, cache=cache, cache_key="data", ttl=60)


@pytest.fixture
def uncached_service(store):
    """Service without a cache."""
    return CacheAsideService(store=store, cache_key="data", ttl=60)


@pytest.fixture
def client(service):
    """Test client whose lifespan wires the in-memory service."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.handler = RecordHandler(service=service)
        yield
        del app.state.handler

    with TestClient(create_app(test_lifespan)) as client:
        yield client
