#!/usr/bin/env python3
"""
Utility script to drop or rebuild the cached user collection.
This is useful for testing and diagnosing stale-cache issues.
"""

import argparse
import asyncio

from app.core.cache import create_cache_backend
from app.core.config import Settings
from app.core.database import create_engine_from_settings
from app.services.user_service import UserService
from app.services.user_store import UserStore


async def run(warm: bool) -> None:
    settings = Settings.from_env()
    store = UserStore(
        create_engine_from_settings(settings),
        timeout_seconds=settings.store_timeout_seconds,
    )
    cache = create_cache_backend(settings)
    service = UserService.from_settings(store, cache, settings)

    try:
        print(f"🔄 Clearing cache key '{settings.users_cache_key}'...")
        await cache.delete(settings.users_cache_key)

        if warm:
            payload = await service.refresh_cache()
            print(f"🔥 Cache warmed with {len(payload)} bytes")

        stats = await cache.stats()
        print("\n✅ Done!")
        print(f"📊 Backend: {stats['backend']}, entries: {stats['entries']}")
    finally:
        await cache.close()
        await store.close()


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--warm",
        action="store_true",
        help="rebuild the entry from the database after clearing it",
    )
    args = parser.parse_args()
    asyncio.run(run(args.warm))


if __name__ == "__main__":
    main()
