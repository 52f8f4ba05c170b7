"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"


async def test_service_info_lists_cache_tiers(client: AsyncClient) -> None:
    """GET /api/v1/health/info describes the service without auth."""
    response = await client.get("/api/v1/health/info")
    assert response.status_code == 200
    data = response.json()
    assert data["cache_tiers"] == ["short", "medium", "long"]
    assert data["max_page_size"] == 100
    assert data["database_configured"] is False


async def test_request_id_is_echoed(client: AsyncClient) -> None:
    """A safe client X-Request-ID is echoed back; an unsafe one is replaced by a UUID."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"

    response = await client.get(
        "/api/v1/health", headers={"X-Request-ID": "not a safe id!"}
    )
    assert response.headers["X-Request-ID"] != "not a safe id!"
    assert len(response.headers["X-Request-ID"]) == 36


async def test_security_headers_present(client: AsyncClient) -> None:
    """Responses carry the default security headers."""
    response = await client.get("/api/v1/health")
    assert response.headers.get("X-Content-Type-Options") == "nosniff"
