from fastapi import Request

from app.core.async_cache import AsyncCache
from app.core.redis_cache import RedisCache
from app.services.user_service import UserService
from app.services.user_store import UserStore

# The shared clients are built once in the application lifespan and kept on
# app.state; these dependencies hand them to the routes.


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_cache(request: Request) -> AsyncCache | RedisCache:
    return request.app.state.cache


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store
