"""
Product Catalog Backend: Service Routes
=======================================

What:  Service-level endpoints that are not about a specific product.

    GET /        → plain-text greeting, "Hello <NAME>!"
    GET /health  → service and database status for uptime checks

Health Status:
    - healthy:   database answers SELECT 1
    - unhealthy: database unreachable (still HTTP 200; the body tells)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy import text

from app import __version__
from app.config import Settings
from app.routes.products import get_settings
from app.schemas.product import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Service"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Greeting",
)
async def greeting(settings: Settings = Depends(get_settings)) -> str:
    return f"Hello {settings.name}!"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns the health status of the service and its database.",
)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """
    Check the health of the service.

    Runs `SELECT 1` against the engine; any failure marks the database
    disconnected and the service unhealthy.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        from app.database import engine
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        upload_mode=settings.upload_mode,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
