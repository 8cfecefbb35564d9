"""
Startup and shutdown of the shared store and cache clients.
"""

from unittest import IsolatedAsyncioTestCase as TestCase
from unittest.mock import AsyncMock

from app.core.async_cache import AsyncCache
from app.core.config import Settings
from app.exceptions.exceptions import CacheException, StoreException
from app.main import create_app, lifespan
from app.services.user_store import UserStore


class TestLifespan(TestCase):
    async def asyncSetUp(self):
        self.store = AsyncMock(spec=UserStore)
        self.cache = AsyncMock(spec=AsyncCache)
        self.cache.backend = "memory"
        self.app = create_app(
            Settings(database_url="sqlite+aiosqlite://", force_memory_cache=True),
            user_store=self.store,
            cache=self.cache,
        )

    async def test_clients_are_released_at_shutdown(self):
        async with lifespan(self.app):
            self.store.create_tables.assert_awaited_once()
            self.assertIsNotNone(self.app.state.user_service)
            self.store.close.assert_not_awaited()

        self.store.close.assert_awaited_once()
        self.cache.close.assert_awaited_once()

    async def test_unreachable_store_releases_both_clients(self):
        self.store.ping.side_effect = StoreException("ping", ConnectionError("db down"))

        with self.assertRaises(StoreException):
            async with lifespan(self.app):
                self.fail("startup should not complete")

        self.store.create_tables.assert_not_awaited()
        self.store.close.assert_awaited_once()
        self.cache.close.assert_awaited_once()

    async def test_unreachable_cache_releases_both_clients(self):
        self.cache.ping.side_effect = CacheException("PING", ConnectionError("redis down"))

        with self.assertRaises(CacheException):
            async with lifespan(self.app):
                self.fail("startup should not complete")

        self.store.close.assert_awaited_once()
        self.cache.close.assert_awaited_once()

    async def test_table_creation_failure_releases_both_clients(self):
        self.store.create_tables.side_effect = StoreException("create_tables", RuntimeError("denied"))

        with self.assertRaises(StoreException):
            async with lifespan(self.app):
                self.fail("startup should not complete")

        self.cache.ping.assert_not_awaited()
        self.store.close.assert_awaited_once()
        self.cache.close.assert_awaited_once()
