"""Health check endpoint.

Learn: Simple GET endpoint that verifies the server is running
and the database is reachable. A failed check is logged; the caller
only sees "error", never the driver's message.
"""

import structlog
from fastapi import APIRouter, Request
from sqlalchemy import text

from homelist import __version__

logger = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Check server health and database connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        async with request.app.state.db.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception:
        logger.exception("health.database_unreachable")
        checks["database"] = "error"

    status = "healthy" if checks["database"] == "ok" else "degraded"
    return {"status": status, **checks}
