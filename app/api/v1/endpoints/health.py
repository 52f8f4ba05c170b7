"""Health check endpoints. No auth and no database access; used for liveness probes."""

from fastapi import APIRouter, Request

from app.core.config import get_settings
from app.schemas.health import HealthResponse, ServiceInfoResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get("/info", response_model=ServiceInfoResponse)
def service_info(request: Request) -> ServiceInfoResponse:
    """Public service description (name, version, cache tiers, paging limit)."""
    settings = get_settings()
    cache = getattr(request.app.state, "query_cache", None)
    return ServiceInfoResponse(
        name=settings.app_name,
        version=settings.app_version,
        cache_tiers=cache.tier_names if cache is not None else [],
        database_configured=bool(settings.database_url),
        max_page_size=settings.max_page_size,
    )
