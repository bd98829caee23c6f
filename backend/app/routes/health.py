"""
Catalog Backend - Health Check Route
======================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Checks the database (critical) and, when enabled, the job queue.
Who:   Called by container health checks, load balancers, and monitoring.

Status levels:
    - healthy:   All dependencies operational (HTTP 200)
    - degraded:  Queue enabled but unreachable (HTTP 200)
    - unhealthy: Database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Response
from sqlalchemy import text

from app import __version__
from app.config import settings
from app.database import engine
from app.schemas.common import HealthResponse
from app.services.queue_manager import queue_manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    """
    Probe the database with SELECT 1 and the queue with PING.

    The queue probe is skipped while QUEUES_ENABLED is off.
    """
    db_status = "connected"
    queue_status = "disabled"
    overall = "healthy"

    # ── Check Database ────────────────────────────────────────────────────
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    # ── Check Queue ───────────────────────────────────────────────────────
    if settings.queues_enabled:
        if await queue_manager.health_check():
            queue_status = "available"
        else:
            queue_status = "unavailable"
            overall = "degraded" if overall != "unhealthy" else overall

    if overall == "unhealthy":
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        queue=queue_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
