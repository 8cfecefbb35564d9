"""
Health check and monitoring endpoints for production deployments.
"""

from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_cache, get_user_store
from app.core.database import get_connection_info
from app.core.logger import get_logger
from app.exceptions.exceptions import CacheException, StoreException
from app.services.user_store import UserStore

logger = get_logger(name="health")
router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if the service is running.
    """
    return {"status": "healthy", "service": "usercache"}


@router.get("/health/database")
async def database_health_check(store: UserStore = Depends(get_user_store)):
    """
    Database health check endpoint.
    Returns connectivity and connection pool status.
    """
    try:
        await store.ping()
    except StoreException as e:
        logger.error(f"Database health check failed: {e}")
        raise HTTPException(
            status_code=503,
            detail={"status": "unhealthy", "database": "disconnected", "error": str(e)},
        )

    return {
        "status": "healthy",
        "database": "connected",
        "connection_pool": get_connection_info(store.engine),
    }


@router.get("/health/cache")
async def cache_health_check(cache=Depends(get_cache)):
    """
    Cache health check endpoint.
    Returns the cache backend and its hit/miss statistics.
    """
    try:
        await cache.ping()
    except CacheException as e:
        logger.error(f"Cache health check failed: {e}")
        raise HTTPException(
            status_code=503,
            detail={"status": "unhealthy", "cache": "disconnected", "error": str(e)},
        )

    return {"status": "healthy", "cache": await cache.stats()}
