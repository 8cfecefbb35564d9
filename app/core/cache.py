from app.core.async_cache import AsyncCache
from app.core.config import Settings
from app.core.logger import get_logger
from app.core.redis_cache import RedisCache

logger = get_logger(name="cache")


# Decide which backend to use. If a Redis URL is configured we switch to the
# shared Redis-based cache; otherwise we fall back to the in-process cache so
# that the application continues to work in local development / unit tests.
def create_cache_backend(settings: Settings) -> AsyncCache | RedisCache:
    if settings.force_memory_cache:
        logger.info("Cache backend: In-memory cache (forced by FORCE_MEMORY_CACHE)")
        return AsyncCache()
    if settings.redis_url:
        logger.info("Cache backend: RedisCache (shared across workers)")
        return RedisCache(
            settings.redis_url,
            prefix=settings.redis_prefix,
            timeout_seconds=settings.cache_timeout_seconds,
        )
    logger.warning("REDIS_URL is not set. Using the in-process cache.")
    return AsyncCache()
