import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    """Runtime configuration collected from the environment."""

    database_url: str
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 1800  # 30 minutes
    db_pool_pre_ping: bool = True

    redis_url: str = ""
    redis_prefix: str = ""
    force_memory_cache: bool = False

    users_cache_key: str = "users"
    users_cache_read_ttl: int = 120  # 2 minutes
    users_cache_refresh_ttl: int = 300  # 5 minutes
    cache_fill_errors_fatal: bool = True

    store_timeout_seconds: float = 5.0
    cache_timeout_seconds: float = 5.0

    @classmethod
    def from_env(cls) -> "Settings":
        database_url = os.getenv("DATABASE_URL")
        if not database_url:
            raise ValueError("DATABASE_URL environment variable is not set")

        return cls(
            database_url=database_url,
            db_pool_size=int(os.getenv("DB_POOL_SIZE", "5")),
            db_max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "10")),
            db_pool_timeout=int(os.getenv("DB_POOL_TIMEOUT", "30")),
            db_pool_recycle=int(os.getenv("DB_POOL_RECYCLE", "1800")),
            db_pool_pre_ping=_env_bool("DB_POOL_PRE_PING", "true"),
            redis_url=os.getenv("REDIS_URL", ""),
            redis_prefix=os.getenv("REDIS_PREFIX", ""),
            force_memory_cache=_env_bool("FORCE_MEMORY_CACHE", "false"),
            users_cache_key=os.getenv("USERS_CACHE_KEY", "users"),
            users_cache_read_ttl=int(os.getenv("USERS_CACHE_READ_TTL", "120")),
            users_cache_refresh_ttl=int(os.getenv("USERS_CACHE_REFRESH_TTL", "300")),
            cache_fill_errors_fatal=_env_bool("CACHE_FILL_ERRORS_FATAL", "true"),
            store_timeout_seconds=float(os.getenv("STORE_TIMEOUT_SECONDS", "5")),
            cache_timeout_seconds=float(os.getenv("CACHE_TIMEOUT_SECONDS", "5")),
        )


# Debug mode can be enabled via environment variable
DEBUG_CACHE = _env_bool("DEBUG_CACHE", "false")
