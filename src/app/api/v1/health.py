"""Health check endpoints.

/health is a liveness probe with no dependencies. /health/ready reports
whether saved quotes can be served: the database must answer and the
lifespan must have installed the quote repository. The calculator itself
works either way, so a degraded readiness only means saving and listing
quotes will answer 503.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy import text

from src.app.config import get_settings
from src.app.core.database import get_engine

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Liveness check."""
    return {"status": "ok", "environment": get_settings().ENVIRONMENT.value}


async def _database_status() -> tuple[str, str | None]:
    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("health.database_unreachable", error=str(e))
        return "error", str(e)
    return "ok", None


@router.get("/health/ready")
async def readiness_check(request: Request):
    """200 when quote storage is usable, 503 otherwise."""
    database, error = await _database_status()
    checks: dict = {
        "database": database,
        "quote_repository": (
            "ok" if getattr(request.app.state, "quote_repository", None) is not None
            else "missing"
        ),
    }
    if error:
        checks["database_error"] = error

    ready = all(checks[k] == "ok" for k in ("database", "quote_repository"))
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "ready" if ready else "degraded", "checks": checks},
    )
