"""
Catalog Backend - Queue Route Handlers
========================================

What:  Test and administration endpoints for the background job queues.
How:   Every route depends on `require_queues_enabled`, which raises
       FeatureDisabledError (→ 503 FEATURE_DISABLED) while QUEUES_ENABLED
       is off, before any queue call is made.
Who:   Operators and smoke tests; not used by the frontend.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends

from app.config import settings
from app.exceptions import FeatureDisabledError, QueueUnavailableError
from app.schemas.common import ErrorResponse
from app.schemas.queue import (
    QueueHealthResponse,
    QueueJobData,
    QueueJobResponse,
    QueueStats,
    QueueStatsResponse,
    QueueTestRequest,
)
from app.services.queue_manager import QueueName, queue_manager

logger = logging.getLogger(__name__)

TEST_JOB_TYPE = "test-job"
DEFAULT_TEST_MESSAGE = "Test job"


def require_queues_enabled() -> None:
    """Dependency gate for the queue feature flag."""
    if not settings.queues_enabled:
        raise FeatureDisabledError(feature="queues")


router = APIRouter(
    prefix="/api/v1/queues",
    tags=["Queues"],
    dependencies=[Depends(require_queues_enabled)],
    responses={503: {"description": "Queues disabled or unavailable", "model": ErrorResponse}},
)


@router.post(
    "/test",
    status_code=201,
    response_model=QueueJobResponse,
    responses={
        201: {"description": "Job enqueued", "model": QueueJobResponse},
        500: {"description": "Queue error", "model": ErrorResponse},
    },
    summary="Enqueue a test job",
)
async def enqueue_test_job(
    body: Optional[QueueTestRequest] = None,
) -> QueueJobResponse:
    """
    Enqueue a `test-job` on the `test` queue.

    Body: {"message": "optional text", "delay": optional milliseconds}
    """
    body = body or QueueTestRequest()
    payload = {
        "message": body.message or DEFAULT_TEST_MESSAGE,
        "requested_at": datetime.now(timezone.utc).isoformat(),
    }
    job = await queue_manager.add_job(
        QueueName.TEST.value,
        TEST_JOB_TYPE,
        payload,
        delay_ms=body.delay,
    )
    logger.info("Test job %s enqueued (delay=%s)", job.id, body.delay)
    return QueueJobResponse(success=True, data=QueueJobData(job_id=job.id, data=job.data))


@router.get(
    "/stats",
    response_model=QueueStatsResponse,
    responses={500: {"description": "Queue error", "model": ErrorResponse}},
    summary="Job counts for every known queue",
)
async def get_queue_stats() -> QueueStatsResponse:
    stats = [
        QueueStats(**await queue_manager.get_queue_stats(queue.value))
        for queue in QueueName
    ]
    return QueueStatsResponse(success=True, data=stats)


@router.get(
    "/health",
    response_model=QueueHealthResponse,
    summary="Probe the queue backend",
)
async def queue_health() -> QueueHealthResponse:
    if not await queue_manager.health_check():
        raise QueueUnavailableError()
    return QueueHealthResponse(success=True, status="healthy")
