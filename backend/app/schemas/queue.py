"""
Catalog Backend - Queue Request/Response Schemas
==================================================

What:  Pydantic models for the job queue test/administration endpoints.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class QueueTestRequest(BaseModel):
    """
    What:  Body of POST /api/v1/queues/test. Both fields are optional.

    delay: milliseconds before the job becomes eligible for processing
    """
    message: Optional[str] = Field(default=None, max_length=1000)
    delay: Optional[int] = Field(default=None, ge=0, description="Delay in milliseconds")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class QueueJobData(BaseModel):
    job_id: str = Field(description="Identifier assigned by the queue")
    data: Dict[str, Any] = Field(description="Payload stored with the job")


class QueueJobResponse(BaseModel):
    success: bool = Field(default=True)
    data: QueueJobData


class QueueStats(BaseModel):
    """Job counts per state for one queue."""
    queue_name: str
    waiting: int
    active: int
    completed: int
    failed: int
    delayed: int


class QueueStatsResponse(BaseModel):
    success: bool = Field(default=True)
    data: List[QueueStats]


class QueueHealthResponse(BaseModel):
    success: bool = Field(default=True)
    status: str = Field(description="healthy when the queue backend answered the probe")
