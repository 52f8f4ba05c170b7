"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class ServiceInfoResponse(BaseModel):
    """Response for GET /health/info (public service description)."""

    name: str
    version: str
    cache_tiers: list[str] = Field(default_factory=list)
    database_configured: bool
    max_page_size: int
