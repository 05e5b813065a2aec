"""Prometheus metrics and Sentry integration.

Provides:
- MetricsMiddleware: ASGI middleware for HTTP request metrics
- record_quote_calculated() / record_quote_saved(): pricing counters
- init_sentry(): Initialize Sentry for the FastAPI app
- get_metrics_response(): Prometheus exposition for /metrics
"""

from __future__ import annotations

import time

import sentry_sdk
from prometheus_client import REGISTRY, Counter, Histogram, generate_latest
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# ── HTTP Metrics ─────────────────────────────────────────────────────────────

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

# ── Pricing Metrics ──────────────────────────────────────────────────────────

quotes_calculated_total = Counter(
    "quotes_calculated_total",
    "Quotes computed by the pricing engine",
    ["tier"],
)

quotes_saved_total = Counter(
    "quotes_saved_total",
    "Quotes persisted to the pricing_quotes table",
    ["tier"],
)


def record_quote_calculated(tier: str) -> None:
    quotes_calculated_total.labels(tier=tier).inc()


def record_quote_saved(tier: str) -> None:
    quotes_saved_total.labels(tier=tier).inc()


# ── Metrics Middleware ───────────────────────────────────────────────────────


def route_template(scope: dict, path: str) -> str:
    """Return the matched route pattern including any router prefix.

    Labels use the pattern (``/api/v1/pricing/quotes/{quote_id}``), not the
    raw path, so quote ids don't explode cardinality. Depending on the FastAPI
    version, the matched route's ``path`` may omit the prefix of the router it
    was included through; the prefix is then recovered from the leading
    segments of the concrete path, which has one segment per template
    segment. Unmatched requests (404s) fall back to the raw path.
    """
    template = getattr(scope.get("route"), "path", None)
    if not template:
        return path
    segments = path.rstrip("/").split("/")
    depth = template.rstrip("/").count("/")
    prefix = "/".join(segments[: max(len(segments) - depth, 0)])
    return prefix + template


class MetricsMiddleware(BaseHTTPMiddleware):
    """ASGI middleware that records Prometheus metrics for every HTTP request.

    Skips the /metrics endpoint itself to avoid self-referential counting.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time

        endpoint = route_template(request.scope, request.url.path)

        http_requests_total.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=str(response.status_code),
        ).inc()

        http_request_duration_seconds.labels(
            method=request.method,
            endpoint=endpoint,
        ).observe(duration)

        return response


# ── Sentry Integration ───────────────────────────────────────────────────────


def init_sentry(dsn: str, environment: str) -> None:
    """Initialize Sentry SDK.

    Args:
        dsn: Sentry DSN string.
        environment: Deployment environment (development, staging, production).
    """
    traces_sample_rate = 0.1 if environment == "production" else 1.0

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        traces_sample_rate=traces_sample_rate,
        integrations=[
            StarletteIntegration(),
            FastApiIntegration(),
        ],
    )


# ── Metrics Endpoint ─────────────────────────────────────────────────────────


def get_metrics_response() -> Response:
    """Generate Prometheus exposition format response."""
    return Response(
        content=generate_latest(REGISTRY),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
