"""Pydantic request/response schemas for the API."""

from app.schemas.cache import CacheClearResponse, CacheStatsResponse, CacheTierStatsResponse
from app.schemas.exam import (
    ExamCountResponse,
    ExamPageResponse,
    ExamResponse,
    ExamSummaryResponse,
    ExamWriteRequest,
)
from app.schemas.health import HealthResponse, ServiceInfoResponse

__all__ = [
    "CacheClearResponse",
    "CacheStatsResponse",
    "CacheTierStatsResponse",
    "ExamCountResponse",
    "ExamPageResponse",
    "ExamResponse",
    "ExamSummaryResponse",
    "ExamWriteRequest",
    "HealthResponse",
    "ServiceInfoResponse",
]
