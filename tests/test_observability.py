"""Unit tests for observability: health, metrics, request logging, Sentry.

Tests cover:
- /health liveness and /health/ready storage checks
- /metrics exposition including pricing counters
- Pricing counters incremented by calculate and save
- HTTP metrics labelled by route pattern, not raw path
- X-Request-ID header on every response
- init_sentry passes environment-dependent sampling
"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.app.core.monitoring import (
    http_requests_total,
    init_sentry,
    quotes_calculated_total,
    quotes_saved_total,
    record_quote_calculated,
    record_quote_saved,
    route_template,
)


@pytest_asyncio.fixture
async def client(admin_env):
    from src.app.api.deps import AdminUser, get_current_admin
    from src.app.main import create_app

    app = create_app()
    app.state.quote_repository = None
    app.dependency_overrides[get_current_admin] = lambda: AdminUser(email="rep@example.com")
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ── Health ───────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "environment": "development"}


@pytest.mark.asyncio
async def test_readiness_degraded_without_quote_repository(client):
    with patch(
        "src.app.api.v1.health._database_status",
        AsyncMock(return_value=("ok", None)),
    ):
        response = await client.get("/health/ready")

    assert response.status_code == 503
    assert response.json() == {
        "status": "degraded",
        "checks": {"database": "ok", "quote_repository": "missing"},
    }


@pytest.mark.asyncio
async def test_readiness_reports_database_error(client):
    with patch(
        "src.app.api.v1.health._database_status",
        AsyncMock(return_value=("error", "connection refused")),
    ):
        response = await client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["checks"]["database_error"] == "connection refused"


@pytest.mark.asyncio
async def test_responses_carry_request_id(client):
    first = await client.get("/health")
    second = await client.get("/health")
    assert first.headers["X-Request-ID"]
    assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_inbound_request_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "dash-123"})
    assert response.headers["X-Request-ID"] == "dash-123"


# ── Metrics ──────────────────────────────────────────────────────────────────


class TestPricingMetrics:
    """Tests for pricing Prometheus counters."""

    def test_record_quote_calculated(self):
        before = quotes_calculated_total.labels(tier="Growth")._value.get()
        record_quote_calculated("Growth")
        after = quotes_calculated_total.labels(tier="Growth")._value.get()
        assert after == before + 1

    def test_record_quote_saved(self):
        before = quotes_saved_total.labels(tier="Enterprise")._value.get()
        record_quote_saved("Enterprise")
        after = quotes_saved_total.labels(tier="Enterprise")._value.get()
        assert after == before + 1


@pytest.mark.asyncio
async def test_calculate_increments_counter(client):
    before = quotes_calculated_total.labels(tier="Starter")._value.get()
    response = await client.post("/api/v1/pricing/calculate", json={"channels": ["chat"]})
    assert response.status_code == 200
    assert quotes_calculated_total.labels(tier="Starter")._value.get() == before + 1


@pytest.mark.asyncio
async def test_http_metrics_use_route_pattern(client):
    labels = {
        "method": "GET",
        "endpoint": "/api/v1/pricing/quotes/{quote_id}",
        "status_code": "503",
    }
    before = http_requests_total.labels(**labels)._value.get()

    response = await client.get("/api/v1/pricing/quotes/some-id")
    assert response.status_code == 503
    assert http_requests_total.labels(**labels)._value.get() == before + 1


class TestRouteTemplate:
    """Endpoint labels keep the router prefix whatever the route reports."""

    def test_route_path_without_router_prefix(self):
        scope = {"route": SimpleNamespace(path="/pricing/quotes/{quote_id}")}
        assert (
            route_template(scope, "/api/v1/pricing/quotes/abc-123")
            == "/api/v1/pricing/quotes/{quote_id}"
        )

    def test_route_path_with_router_prefix(self):
        scope = {"route": SimpleNamespace(path="/api/v1/pricing/quotes/{quote_id}")}
        assert (
            route_template(scope, "/api/v1/pricing/quotes/abc-123")
            == "/api/v1/pricing/quotes/{quote_id}"
        )

    def test_top_level_route(self):
        scope = {"route": SimpleNamespace(path="/health")}
        assert route_template(scope, "/health") == "/health"

    def test_unmatched_request_uses_raw_path(self):
        assert route_template({}, "/nope/123") == "/nope/123"


@pytest.mark.asyncio
async def test_metrics_endpoint(client):
    await client.post("/api/v1/pricing/calculate", json={})
    response = await client.get("/metrics")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "quotes_calculated_total" in response.text
    assert "http_requests_total" in response.text


# ── Sentry ───────────────────────────────────────────────────────────────────


class TestInitSentry:
    def test_production_samples_ten_percent(self):
        with patch("src.app.core.monitoring.sentry_sdk.init") as mock_init:
            init_sentry(dsn="https://key@sentry.example/1", environment="production")
        kwargs = mock_init.call_args.kwargs
        assert kwargs["environment"] == "production"
        assert kwargs["traces_sample_rate"] == 0.1

    def test_development_samples_everything(self):
        with patch("src.app.core.monitoring.sentry_sdk.init") as mock_init:
            init_sentry(dsn="https://key@sentry.example/1", environment="development")
        assert mock_init.call_args.kwargs["traces_sample_rate"] == 1.0
