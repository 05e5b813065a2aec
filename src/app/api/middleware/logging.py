"""Structured request logging middleware.

Every request is logged once on completion with method, path, status_code,
duration_ms, request_id and, when a valid bearer token is present, the admin
email. Health and metrics probes are logged at debug level so load balancer
and Prometheus scrapes don't drown out quote traffic.

The request id is taken from an inbound X-Request-ID header when the caller
supplies one (the admin dashboard does), otherwise generated. It is bound to
the structlog context so log lines emitted by handlers and the repository
carry it too, and echoed back in the response header.
"""

from __future__ import annotations

import logging
import time
import uuid

import structlog
from fastapi import Request, Response
from jose import JWTError, jwt
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from src.app.config import Environment, get_settings

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

_PROBE_PATHS = frozenset({"/health", "/health/ready", "/metrics"})


def configure_structlog() -> None:
    """Configure stdlib logging and structlog for the current environment.

    Production renders one JSON object per line; every other environment
    uses the colored console renderer.
    """
    settings = get_settings()

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    )

    if settings.ENVIRONMENT == Environment.production:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _admin_email(request: Request) -> str | None:
    """Best-effort token subject for log attribution. Never rejects a request."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    settings = get_settings()
    try:
        payload = jwt.decode(
            auth_header[7:],
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except JWTError:
        return None
    return payload.get("sub")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with timing, request id and admin attribution."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        structlog.contextvars.bind_contextvars(request_id=request_id)
        fields = {
            "method": request.method,
            "path": request.url.path,
            "admin": _admin_email(request),
        }
        start_time = time.monotonic()

        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "request.failed",
                status_code=500,
                duration_ms=round((time.monotonic() - start_time) * 1000, 2),
                exc_info=True,
                **fields,
            )
            raise
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[REQUEST_ID_HEADER] = request_id

        if response.status_code >= 500:
            log_method = logger.error
        elif response.status_code >= 400:
            log_method = logger.warning
        elif request.url.path in _PROBE_PATHS:
            log_method = logger.debug
        else:
            log_method = logger.info

        log_method(
            "request.completed",
            status_code=response.status_code,
            duration_ms=round((time.monotonic() - start_time) * 1000, 2),
            request_id=request_id,
            **fields,
        )
        return response
