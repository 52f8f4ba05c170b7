"""Query cache administration schemas."""

from pydantic import BaseModel


class CacheTierStatsResponse(BaseModel):
    """Counters for one cache tier."""

    entries: int
    capacity: int
    ttl_seconds: float
    hits: int
    misses: int
    evictions: int
    expirations: int
    hit_rate_percent: float


class CacheStatsResponse(BaseModel):
    """Response for GET /cache/stats."""

    tiers: dict[str, CacheTierStatsResponse]


class CacheClearResponse(BaseModel):
    """Response for DELETE /cache."""

    cleared: int
