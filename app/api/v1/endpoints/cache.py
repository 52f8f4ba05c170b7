"""Query cache administration (service role only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import get_query_cache, require_operation
from app.core.limiter import limit_writes
from app.domain.enums import Operation
from app.infrastructure.cache.memory_cache import QueryCache
from app.schemas.cache import CacheClearResponse, CacheStatsResponse

router = APIRouter()


@router.get("/stats", response_model=CacheStatsResponse)
async def cache_stats(
    _: Annotated[object, Depends(require_operation(Operation.MANAGE_CACHE))],
    cache: Annotated[QueryCache, Depends(get_query_cache)],
):
    """Per-tier entry counts, hit/miss counters, evictions and expirations."""
    return CacheStatsResponse(tiers=cache.stats())


@router.delete("", response_model=CacheClearResponse)
@limit_writes
async def clear_cache(
    request: Request,
    _: Annotated[object, Depends(require_operation(Operation.MANAGE_CACHE))],
    cache: Annotated[QueryCache, Depends(get_query_cache)],
):
    """Drop every cached query result in all tiers."""
    return CacheClearResponse(cleared=cache.clear())
