"""
Cache-aside coordination for the user collection.

Reads probe the cache first and fall back to the store, repopulating the
cache on the way out. Writes go to the store and then synchronously refresh
the cached snapshot. Nothing orders the refresh of one write against another,
so when refreshes finish out of order the cache keeps whichever snapshot was
written last, not the one from the latest store mutation. Readers may see a
snapshot up to one TTL old.
"""

from app.api.schemas.user import UserRecordList
from app.core.config import Settings
from app.core.logger import get_logger
from app.exceptions.exceptions import (
    BaseUserServiceException,
    CacheException,
    SerializationException,
)
from app.utils.validation import require_present

logger = get_logger(name="user_service")


class UserService:
    def __init__(
        self,
        store,
        cache,
        cache_key: str = "users",
        read_ttl: int = 120,
        refresh_ttl: int = 300,
        fill_errors_fatal: bool = True,
    ):
        self.store = store
        self.cache = cache
        self.cache_key = cache_key
        self.read_ttl = read_ttl
        self.refresh_ttl = refresh_ttl
        self.fill_errors_fatal = fill_errors_fatal

    @classmethod
    def from_settings(cls, store, cache, settings: Settings) -> "UserService":
        return cls(
            store,
            cache,
            cache_key=settings.users_cache_key,
            read_ttl=settings.users_cache_read_ttl,
            refresh_ttl=settings.users_cache_refresh_ttl,
            fill_errors_fatal=settings.cache_fill_errors_fatal,
        )

    # Read path ------------------------------------------------------------

    async def list_users(self) -> bytes:
        """Return the serialized user collection, from cache when possible.

        A hit is returned verbatim without touching the store or the entry's
        TTL. A miss, or a failing cache probe, loads the collection from the
        store and writes it back with ``read_ttl``. If that write fails the
        request fails too, unless ``fill_errors_fatal`` is off, in which case
        the fresh payload is served uncached.
        """
        try:
            cached = await self.cache.get(self.cache_key)
        except CacheException as exc:
            logger.warning(f"Cache probe for {self.cache_key} failed, reading from store: {exc}")
            cached = None

        if cached is not None:
            return cached

        payload = await self._load_collection()

        try:
            await self.cache.set(self.cache_key, payload, ttl=self.read_ttl)
        except CacheException as exc:
            if self.fill_errors_fatal:
                raise
            logger.error(f"Serving users uncached, cache fill failed: {exc}")

        return payload

    # Write paths ----------------------------------------------------------

    async def create_user(self, username: str | None, email: str | None) -> None:
        require_present(username=username, email=email)
        await self.store.insert_user(username, email)
        await self._refresh_after_write("create")

    async def update_user(self, username: str | None, email: str | None) -> None:
        require_present(username=username, email=email)
        affected = await self.store.update_user_email(username, email)
        if not affected:
            logger.info(f"Update matched no user named {username}")
        await self._refresh_after_write("update")

    async def delete_user(self, username: str | None) -> None:
        require_present(username=username)
        affected = await self.store.delete_user(username)
        if not affected:
            logger.info(f"Delete matched no user named {username}")
        await self._refresh_after_write("delete")

    async def refresh_cache(self) -> bytes:
        """Re-read the collection from the store and overwrite the cache entry."""
        payload = await self._load_collection()
        await self.cache.set(self.cache_key, payload, ttl=self.refresh_ttl)
        return payload

    # Internal helpers -----------------------------------------------------

    async def _load_collection(self) -> bytes:
        users = await self.store.query_all_users()
        try:
            return UserRecordList.dump_json(users)
        except (TypeError, ValueError) as exc:
            raise SerializationException(exc) from exc

    async def _refresh_after_write(self, operation: str) -> None:
        # The store already accepted the write, so cache trouble is not reported
        try:
            await self.refresh_cache()
        except BaseUserServiceException as exc:
            logger.error(f"Failed to refresh users cache after {operation}: {exc}")
