"""Telemetry config, tracing decorator and lifespan wiring."""

import pytest
from fastapi import FastAPI
from opentelemetry.sdk.trace.export import ConsoleSpanExporter

from app.core.lifespan import create_lifespan
from app.infrastructure.cache import QueryCache
from app.shared.telemetry import TelemetryConfig, get_telemetry, traced


def test_disabled_telemetry_sets_nothing_up() -> None:
    config = TelemetryConfig("exam-calendar-api", "1.0.0", enabled=False)
    assert config.setup_telemetry() is None
    assert config.tracer_provider is None


def test_exporter_selection() -> None:
    config = TelemetryConfig("exam-calendar-api", "1.0.0")
    assert isinstance(config._build_exporter("console", None), ConsoleSpanExporter)
    assert config._build_exporter("none", None) is None
    # otlp without endpoint and unknown names fall back to the console
    assert isinstance(config._build_exporter("otlp", None), ConsoleSpanExporter)
    assert isinstance(config._build_exporter("zipkin", None), ConsoleSpanExporter)


async def test_traced_passes_results_and_errors_through() -> None:
    @traced("test.ok")
    async def ok(page: int = 0) -> int:
        return page + 1

    @traced("test.fail")
    def fail() -> None:
        raise RuntimeError("boom")

    assert await ok(page=2) == 3
    with pytest.raises(RuntimeError):
        fail()


async def test_lifespan_installs_empty_query_cache() -> None:
    app = FastAPI()
    async with create_lifespan(app):
        cache = app.state.query_cache
        assert isinstance(cache, QueryCache)
        assert cache.tier_names == ["short", "medium", "long"]
        assert all(t["entries"] == 0 for t in cache.stats().values())
    assert get_telemetry() is None
