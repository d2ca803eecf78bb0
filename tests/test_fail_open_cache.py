"""
Tests for the one-way enabled -> disabled cache wrapper.
"""

import pytest

from cache_aside.errors import CacheError, CacheUnavailable
from cache_aside.services import FailOpenCache


@pytest.mark.asyncio
async def test_passes_through_while_enabled(cache):
    wrapper = FailOpenCache(cache)

    await wrapper.set("data", "[]", 60)

    assert await wrapper.get("data") == "[]"
    await wrapper.delete("data")
    assert await wrapper.get("data") is None
    assert wrapper.enabled is True


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", ["get", "set", "delete"])
async def test_transport_fault_disables_on_any_operation(cache, operation):
    cache.fail_on[operation] = CacheUnavailable("connection reset")
    wrapper = FailOpenCache(cache)

    if operation == "get":
        assert await wrapper.get("data") is None
    elif operation == "set":
        await wrapper.set("data", "[]", 60)
    else:
        await wrapper.delete("data")

    assert wrapper.enabled is False
    assert await wrapper.ping() is False


@pytest.mark.asyncio
async def test_disabled_cache_never_reaches_backend_again(cache):
    cache.fail_on["get"] = CacheUnavailable("timeout")
    wrapper = FailOpenCache(cache)
    await wrapper.get("data")
    cache.fail_on.clear()

    await wrapper.set("data", "[]", 60)
    assert await wrapper.get("data") is None

    assert cache.calls["get"] == 1
    assert cache.calls["set"] == 0


@pytest.mark.asyncio
async def test_other_cache_errors_are_absorbed_without_disabling(cache):
    cache.fail_on["get"] = CacheError("WRONGTYPE")
    cache.fail_on["delete"] = CacheError("READONLY")
    wrapper = FailOpenCache(cache)

    assert await wrapper.get("data") is None
    await wrapper.delete("data")

    assert wrapper.enabled is True
    cache.fail_on.clear()
    await wrapper.set("data", "[]", 60)
    assert cache.data == {"data": "[]"}


@pytest.mark.asyncio
async def test_close_releases_backend_after_disable(cache):
    cache.fail_on["get"] = CacheUnavailable("connection reset")
    wrapper = FailOpenCache(cache)
    await wrapper.get("data")
    assert wrapper.enabled is False

    await wrapper.close()

    assert cache.closed is True
