"""
Catalog Backend - Shared Response Schemas
===========================================

What:  Envelope models shared by every router: the error envelope and the
       service health payload.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        success: Always false
        error: Machine-readable error code (NOT_FOUND, FEATURE_DISABLED, INTERNAL_ERROR, ...)
        message: Human-readable description for display to users
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "success": false,
            "error": "FEATURE_DISABLED",
            "message": "The queues feature is disabled on this server",
            "request_id": "a1b2c3d4"
        }
    """
    success: bool = Field(default=False, description="Always false for errors")
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and dependency status.
    Who:   Returned by GET /health for load balancer and container probes.
    """
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    queue: str = Field(description="Queue status: available, unavailable, disabled")
    uptime_seconds: float = Field(description="Seconds since service started")
