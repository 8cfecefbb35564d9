"""
Direct string, list and hash passthrough to the cache backend.

These keys have nothing to do with the cached user collection. Values are
written verbatim and never expire.
"""

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import PlainTextResponse

from app.api.dependencies import get_cache
from app.exceptions.exceptions import KeyNotFoundException
from app.utils.validation import require_present

router = APIRouter()

KV_METHODS = ["GET", "POST"]


@router.api_route("/set-string", methods=KV_METHODS)
async def set_string(
    key: str | None = Query(None),
    value: str | None = Query(None),
    cache=Depends(get_cache),
) -> Response:
    require_present(key=key, value=value)
    await cache.set(key, value, ttl=None)
    return Response(status_code=200)


@router.api_route("/get-string", methods=KV_METHODS, response_class=PlainTextResponse)
async def get_string(key: str | None = Query(None), cache=Depends(get_cache)) -> str:
    require_present(key=key)
    value = await cache.get(key)
    if value is None:
        raise KeyNotFoundException(key)
    return f"Value for key {key}: {value.decode('utf-8', errors='replace')}\n"


@router.api_route("/set-list", methods=KV_METHODS)
async def set_list(
    key: str | None = Query(None),
    value: list[str] = Query([]),
    cache=Depends(get_cache),
) -> Response:
    require_present(key=key, value=value)
    # Appends, like RPUSH; the existing list is kept
    await cache.push_list(key, value)
    return Response(status_code=200)


@router.api_route("/get-list", methods=KV_METHODS, response_class=PlainTextResponse)
async def get_list(key: str | None = Query(None), cache=Depends(get_cache)) -> str:
    require_present(key=key)
    values = await cache.range_list(key)
    return f"Values for key {key}: [{' '.join(values)}]\n"


@router.api_route("/set-hash", methods=KV_METHODS)
async def set_hash(
    key: str | None = Query(None),
    field: str | None = Query(None),
    value: str | None = Query(None),
    cache=Depends(get_cache),
) -> Response:
    require_present(key=key, field=field, value=value)
    await cache.set_hash_field(key, field, value)
    return Response(status_code=200)


@router.api_route("/get-hash", methods=KV_METHODS, response_class=PlainTextResponse)
async def get_hash(
    key: str | None = Query(None),
    field: str | None = Query(None),
    cache=Depends(get_cache),
) -> str:
    require_present(key=key, field=field)
    value = await cache.get_hash_field(key, field)
    if value is None:
        raise KeyNotFoundException(key, field)
    return f"Value for field {field} in key {key}: {value}\n"
