"""
FlyBook Backend: Health Check and Banner Routes
=================================================

What:  GET / (plain-text banner) and GET /health (dependency probe).
Who:   Load balancers, Docker health checks, and humans checking the deploy.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy import text

from flybook import __version__
from flybook.database import database
from flybook.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Service banner")
async def root() -> str:
    return "FlyBook API is running"


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    """
    Probe the database with SELECT 1 through the shared engine.

    Connecting here counts as first use, so a health probe on a cold
    process also establishes the connection.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        engine = await database.connect()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
