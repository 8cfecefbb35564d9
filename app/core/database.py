from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import Settings


def to_async_url(database_url: str) -> str:
    """Convert a DATABASE_URL to its async driver form if it names a sync driver."""
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("postgresql+psycopg2://"):
        return database_url.replace("postgresql+psycopg2://", "postgresql+asyncpg://", 1)
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return database_url


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Build the process-wide async engine and its connection pool."""
    url = to_async_url(settings.database_url)

    # SQLite pools don't take the sizing arguments
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=False)

    return create_async_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=settings.db_pool_pre_ping,  # Enables connection health checks
        echo=False,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def get_connection_info(engine: AsyncEngine) -> dict:
    """Get current connection pool information for monitoring"""
    pool = engine.pool
    info = {"pool": type(pool).__name__}
    # Only queue-style pools report occupancy
    if hasattr(pool, "checkedout"):
        info.update(
            {
                "checked_out": pool.checkedout(),
                "checked_in": pool.checkedin(),
                "size": pool.size(),
            }
        )
    return info
