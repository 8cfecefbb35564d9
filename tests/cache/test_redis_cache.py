"""
Tests for the Redis cache backend against a mocked redis.asyncio client.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.core.async_cache import AsyncCache
from app.core.cache import create_cache_backend
from app.core.config import Settings
from app.core.redis_cache import RedisCache
from app.exceptions.exceptions import CacheException


@pytest.fixture
def client():
    return AsyncMock()


@pytest.fixture
def cache(client):
    return RedisCache("", timeout_seconds=0.5, client=client)


@pytest.mark.asyncio
async def test_get_returns_raw_bytes(cache, client):
    client.get.return_value = b'[{"id":1}]'

    assert await cache.get("users") == b'[{"id":1}]'
    client.get.assert_awaited_once_with("users")
    assert cache.hits == 1


@pytest.mark.asyncio
async def test_get_missing_is_none(cache, client):
    client.get.return_value = None

    assert await cache.get("users") is None
    assert cache.misses == 1


@pytest.mark.asyncio
async def test_set_passes_ttl_as_expiry(cache, client):
    await cache.set("users", b"[]", ttl=120)
    client.set.assert_awaited_once_with("users", b"[]", ex=120)


@pytest.mark.asyncio
async def test_set_without_ttl_does_not_expire(cache, client):
    await cache.set("greeting", "hello", ttl=None)
    client.set.assert_awaited_once_with("greeting", "hello", ex=None)


@pytest.mark.asyncio
async def test_prefix_is_applied(client):
    cache = RedisCache("", prefix="usercache", client=client)
    client.get.return_value = None

    await cache.get("users")
    client.get.assert_awaited_once_with("usercache:users")


@pytest.mark.asyncio
async def test_list_operations(cache, client):
    client.lrange.return_value = [b"a", b"b"]

    await cache.push_list("letters", ["a", "b"])
    client.rpush.assert_awaited_once_with("letters", "a", "b")

    assert await cache.range_list("letters") == ["a", "b"]
    client.lrange.assert_awaited_once_with("letters", 0, -1)


@pytest.mark.asyncio
async def test_hash_operations(cache, client):
    client.hget.return_value = b"ann"

    await cache.set_hash_field("profile", "name", "ann")
    client.hset.assert_awaited_once_with("profile", "name", "ann")

    assert await cache.get_hash_field("profile", "name") == "ann"

    client.hget.return_value = None
    assert await cache.get_hash_field("profile", "zip") is None


@pytest.mark.asyncio
async def test_redis_error_becomes_cache_exception(cache, client):
    client.get.side_effect = RedisConnectionError("connection refused")

    with pytest.raises(CacheException) as exc_info:
        await cache.get("users")

    assert exc_info.value.operation == "GET"


@pytest.mark.asyncio
async def test_timeout_becomes_cache_exception(client):
    async def hang(*args, **kwargs):
        await asyncio.sleep(1)

    client.set.side_effect = hang
    cache = RedisCache("", timeout_seconds=0.01, client=client)

    with pytest.raises(CacheException):
        await cache.set("users", b"[]", ttl=300)


@pytest.mark.asyncio
async def test_close_releases_client(cache, client):
    await cache.close()
    client.aclose.assert_awaited_once()


def test_requires_url_without_client():
    with pytest.raises(RuntimeError):
        RedisCache("")


def test_backend_selection():
    memory = create_cache_backend(Settings(database_url="sqlite://", redis_url=""))
    assert isinstance(memory, AsyncCache)

    forced = create_cache_backend(
        Settings(database_url="sqlite://", redis_url="redis://localhost:6379/0", force_memory_cache=True)
    )
    assert isinstance(forced, AsyncCache)

    shared = create_cache_backend(
        Settings(database_url="sqlite://", redis_url="redis://localhost:6379/0", redis_prefix="uc")
    )
    assert isinstance(shared, RedisCache)
    assert shared.prefix == "uc"
