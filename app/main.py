import os
import time
from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.routes import health, kv, users
from app.core.cache import create_cache_backend
from app.core.config import Settings
from app.core.database import create_engine_from_settings
from app.core.logger import get_logger
from app.exceptions.exceptions import BaseUserServiceException
from app.services.user_service import UserService
from app.services.user_store import UserStore

# Configure logging
logger = get_logger(name="usercache")

# Threshold for slow request logging (in seconds)
SLOW_REQUEST_THRESHOLD_SECONDS = 2


# Request logging middleware
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.time()

        method = request.method
        url = request.url.path
        query_params = f"?{request.query_params}" if request.query_params else ""
        client = request.client.host if request.client else "unknown"

        logger.info(f"Request received: {method} {url}{query_params} from {client}")

        response = await call_next(request)

        process_time = time.time() - start_time
        message = (
            f"Request completed: {method} {url} - Status: {response.status_code} - "
            f"Took: {process_time:.4f}s"
        )
        if process_time > SLOW_REQUEST_THRESHOLD_SECONDS:
            logger.warning(f"Slow request. {message}")
        else:
            logger.info(message)

        return response


# Exception handlers
class UserServiceExceptionHandler:
    """Maps service errors to JSON error responses."""

    @staticmethod
    async def handle_service_exception(request: Request, exc: BaseUserServiceException):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
        else:
            logger.warning(f"{request.method} {request.url.path} rejected: {exc.detail}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @staticmethod
    async def handle_validation_exception(request: Request, exc: RequestValidationError):
        # Malformed bodies are client errors like any other missing input
        logger.warning(f"Invalid request body for {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"detail": "Invalid request body"})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the shared store pool and cache client, release them at shutdown."""
    settings = app.state.settings or Settings.from_env()

    store = app.state.user_store
    if store is None:
        store = UserStore(
            create_engine_from_settings(settings),
            timeout_seconds=settings.store_timeout_seconds,
        )
    cache = app.state.cache
    if cache is None:
        cache = create_cache_backend(settings)

    try:
        await store.ping()
        logger.info("Connected to the database")
        await store.create_tables()
        await cache.ping()
        logger.info(f"Connected to the {cache.backend} cache")
    except Exception as exc:
        logger.error(f"Startup failed, releasing store and cache connections: {exc}")
        await cache.close()
        await store.close()
        raise

    app.state.user_store = store
    app.state.cache = cache
    app.state.user_service = UserService.from_settings(store, cache, settings)

    yield

    await cache.close()
    await store.close()
    logger.info("Released store and cache connections")


def create_app(
    settings: Settings | None = None,
    user_store: UserStore | None = None,
    cache=None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Settings default to the environment and are read when the app starts.
    A store or cache passed in replaces the one the settings would build.
    """
    app = FastAPI(
        title="User Cache API",
        description="User records with a cache-aside collection cache",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.user_store = user_store
    app.state.cache = cache

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Add exception handlers
    app.add_exception_handler(BaseUserServiceException, UserServiceExceptionHandler.handle_service_exception)
    app.add_exception_handler(RequestValidationError, UserServiceExceptionHandler.handle_validation_exception)

    # Include routers
    app.include_router(users.router, tags=["users"])
    app.include_router(kv.router, tags=["key-value"])
    app.include_router(health.router, tags=["health"])

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8080"))
    debug = os.getenv("DEBUG", "False").lower() == "true"

    logger.info(f"Starting server on {host}:{port}")
    uvicorn.run("app.main:app", host=host, port=port, reload=debug)
