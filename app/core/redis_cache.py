import asyncio
from collections.abc import Awaitable
from typing import Any, TypeVar

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from app.core.config import DEBUG_CACHE
from app.core.logger import get_logger
from app.exceptions.exceptions import CacheException

logger = get_logger(name="redis_cache")

T = TypeVar("T")


class RedisCache:
    """A Redis-backed cache that mimics the public API of AsyncCache.

    Values are stored verbatim: the user collection is already serialized
    JSON and the key/value passthrough writes caller strings as-is. Every
    command is bounded by ``timeout_seconds``; redis errors and timeouts are
    raised as ``CacheException``.
    """

    backend = "redis"

    def __init__(
        self,
        redis_url: str,
        prefix: str = "",
        timeout_seconds: float = 5.0,
        client: aioredis.Redis | None = None,
    ):
        if client is None:
            if not redis_url:
                raise RuntimeError("REDIS_URL must be set to use RedisCache")
            client = aioredis.from_url(
                redis_url,
                decode_responses=False,
                socket_timeout=timeout_seconds,
                socket_connect_timeout=timeout_seconds,
            )
        self.client = client
        self.prefix = prefix
        self.timeout = timeout_seconds
        self.hits = 0
        self.misses = 0

    # Internal helpers -----------------------------------------------------

    def _prefixed(self, key: str) -> str:
        return f"{self.prefix}:{key}" if self.prefix else key

    async def _run(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except (RedisError, OSError, asyncio.TimeoutError) as exc:
            logger.error(f"RedisCache: {operation} failed – {exc!r}")
            raise CacheException(operation, exc) from exc

    @staticmethod
    def _decode(value: bytes | str) -> str:
        return value.decode("utf-8") if isinstance(value, bytes) else value

    # Public API -----------------------------------------------------------

    async def get(self, key: str) -> bytes | None:
        raw = await self._run("GET", self.client.get(self._prefixed(key)))
        if raw is None:
            if DEBUG_CACHE:
                logger.debug(f"Cache MISS for key: {key}")
            self.misses += 1
            return None
        if DEBUG_CACHE:
            logger.debug(f"Cache HIT for key: {key}")
        self.hits += 1
        return raw

    async def set(self, key: str, value: str | bytes, ttl: int | None = None) -> None:
        # ex=None stores the key without expiry
        await self._run("SET", self.client.set(self._prefixed(key), value, ex=ttl or None))
        if DEBUG_CACHE:
            logger.debug(f"Cache SET for key: {key} with TTL: {ttl}")

    async def push_list(self, key: str, values: list[str]) -> None:
        await self._run("RPUSH", self.client.rpush(self._prefixed(key), *values))

    async def range_list(self, key: str) -> list[str]:
        values = await self._run("LRANGE", self.client.lrange(self._prefixed(key), 0, -1))
        return [self._decode(value) for value in values]

    async def set_hash_field(self, key: str, field: str, value: str) -> None:
        await self._run("HSET", self.client.hset(self._prefixed(key), field, value))

    async def get_hash_field(self, key: str, field: str) -> str | None:
        value = await self._run("HGET", self.client.hget(self._prefixed(key), field))
        return None if value is None else self._decode(value)

    async def delete(self, key: str) -> None:
        await self._run("DELETE", self.client.delete(self._prefixed(key)))

    async def ping(self) -> None:
        await self._run("PING", self.client.ping())

    async def close(self) -> None:
        await self.client.aclose()

    async def stats(self) -> dict[str, Any]:
        total = self.hits + self.misses
        hit_rate = self.hits / total if total > 0 else 0.0
        try:
            entries = await self._run("DBSIZE", self.client.dbsize())
        except CacheException:
            entries = -1
        return {
            "backend": self.backend,
            "hits": self.hits,
            "misses": self.misses,
            "total": total,
            "hit_rate": hit_rate,
            "entries": entries,
        }
