"""
In-process async cache with the same public API as RedisCache.
Used for local development and tests, or when FORCE_MEMORY_CACHE is set.
"""

import asyncio
import time
from typing import Any

from app.core.config import DEBUG_CACHE
from app.core.logger import get_logger
from app.exceptions.exceptions import CacheException

logger = get_logger(name="async_cache")

if DEBUG_CACHE:
    logger.info("🐛 Cache debugging is enabled. You will see cache operations logged.")


class AsyncCache:
    """Async-compatible in-memory cache holding strings, lists and hashes"""

    backend = "memory"

    def __init__(self):
        self.cache: dict[str, Any] = {}
        self.expiry: dict[str, float] = {}
        self.hits = 0
        self.misses = 0
        self.lock = asyncio.Lock()  # Lock for thread safety in async context

    def _live(self, key: str) -> Any:
        """Return the entry under key, dropping it first if it has expired."""
        if key in self.cache and time.time() >= self.expiry.get(key, float("inf")):
            del self.cache[key]
            self.expiry.pop(key, None)
        return self.cache.get(key)

    @staticmethod
    def _check_type(key: str, entry: Any, expected: type) -> None:
        if entry is not None and not isinstance(entry, expected):
            raise CacheException(
                "type_check",
                TypeError(f"WRONGTYPE key {key} holds a {type(entry).__name__}"),
            )

    @staticmethod
    def _to_bytes(value: str | bytes) -> bytes:
        return value.encode("utf-8") if isinstance(value, str) else value

    async def get(self, key: str) -> bytes | None:
        """Get a string value, or None if it is absent or expired."""
        async with self.lock:
            entry = self._live(key)
            self._check_type(key, entry, bytes)
            if entry is not None:
                if DEBUG_CACHE:
                    logger.debug(f"Cache HIT for key: {key}")
                self.hits += 1
                return entry
            if DEBUG_CACHE:
                logger.debug(f"Cache MISS for key: {key}")
            self.misses += 1
            return None

    async def set(self, key: str, value: str | bytes, ttl: int | None = None) -> None:
        """Store a string value. A falsy ttl means no expiry."""
        async with self.lock:
            self.cache[key] = self._to_bytes(value)
            if ttl:
                self.expiry[key] = time.time() + ttl
            else:
                self.expiry.pop(key, None)
            if DEBUG_CACHE:
                logger.debug(f"Cache SET for key: {key} with TTL: {ttl}")

    async def push_list(self, key: str, values: list[str]) -> None:
        async with self.lock:
            entry = self._live(key)
            self._check_type(key, entry, list)
            if entry is None:
                entry = self.cache[key] = []
            entry.extend(values)

    async def range_list(self, key: str) -> list[str]:
        async with self.lock:
            entry = self._live(key)
            self._check_type(key, entry, list)
            return list(entry or [])

    async def set_hash_field(self, key: str, field: str, value: str) -> None:
        async with self.lock:
            entry = self._live(key)
            self._check_type(key, entry, dict)
            if entry is None:
                entry = self.cache[key] = {}
            entry[field] = value

    async def get_hash_field(self, key: str, field: str) -> str | None:
        async with self.lock:
            entry = self._live(key)
            self._check_type(key, entry, dict)
            return (entry or {}).get(field)

    async def delete(self, key: str) -> None:
        """Delete a value from the cache asynchronously"""
        async with self.lock:
            if key in self.cache:
                if DEBUG_CACHE:
                    logger.debug(f"Cache: Deleting key: {key}")
                del self.cache[key]
            self.expiry.pop(key, None)

    async def clear(self) -> None:
        """Clear all values from the cache asynchronously"""
        if DEBUG_CACHE:
            logger.debug("Cache: Clearing all entries")
        async with self.lock:
            self.cache.clear()
            self.expiry.clear()

    async def ping(self) -> None:
        return None

    async def close(self) -> None:
        await self.clear()

    async def stats(self) -> dict[str, Any]:
        """Get cache statistics asynchronously"""
        async with self.lock:
            total = self.hits + self.misses
            hit_rate = self.hits / total if total > 0 else 0
            return {
                "backend": self.backend,
                "hits": self.hits,
                "misses": self.misses,
                "total": total,
                "hit_rate": hit_rate,
                "entries": len(self.cache),
            }
