"""Query cache administration endpoints (service role only)."""

from httpx import AsyncClient


async def test_cache_stats_requires_service_role(
    client: AsyncClient, user_headers
) -> None:
    assert (await client.get("/api/v1/cache/stats")).status_code == 401
    response = await client.get("/api/v1/cache/stats", headers=user_headers)
    assert response.status_code == 403


async def test_cache_stats_counts_hits(
    client: AsyncClient, seeded_exams, service_headers
) -> None:
    await client.get("/api/v1/exams")
    await client.get("/api/v1/exams")
    response = await client.get("/api/v1/cache/stats", headers=service_headers)
    assert response.status_code == 200
    short = response.json()["tiers"]["short"]
    assert short["entries"] == 1
    assert short["hits"] == 1
    assert short["misses"] == 1
    assert set(response.json()["tiers"]) == {"short", "medium", "long"}


async def test_cache_clear(client: AsyncClient, seeded_exams, service_headers) -> None:
    await client.get("/api/v1/exams")
    await client.get("/api/v1/exams/years")
    response = await client.delete("/api/v1/cache", headers=service_headers)
    assert response.status_code == 200
    assert response.json() == {"cleared": 2}
    stats = (await client.get("/api/v1/cache/stats", headers=service_headers)).json()
    assert all(t["entries"] == 0 for t in stats["tiers"].values())
