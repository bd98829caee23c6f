"""
Catalog Backend - Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the structured JSON error envelope with the matching status.
Who:   Raised by services and route dependencies; caught by global handlers.

Exception Hierarchy:
    CatalogError (base)            → 500 INTERNAL_ERROR
    ├── NotFoundError              → 404 NOT_FOUND
    ├── FeatureDisabledError       → 503 FEATURE_DISABLED
    ├── QueueUnavailableError      → 503 SERVICE_UNAVAILABLE
    ├── DatabaseError              → 500 INTERNAL_ERROR
    └── QueueServiceError          → 500 INTERNAL_ERROR

Error envelope returned to clients:
    {
        "success": false,
        "error": "NOT_FOUND",
        "message": "plan with ID 'PREMIUM' was not found",
        "request_id": "a1b2c3d4"
    }
"""

from typing import Any, Dict, Optional


class CatalogError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(CatalogError):
    """
    Raised when a requested resource does not exist.

    When:    GET /api/v1/plans/{tier} for a tier with no plan row.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing records; services convert that
    None into this exception.
    """

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class FeatureDisabledError(CatalogError):
    """
    Raised when an endpoint belongs to a subsystem switched off by a feature flag.

    When:    Any /api/v1/queues endpoint while QUEUES_ENABLED is false.
    HTTP:    503 Service Unavailable
    """

    status_code = 503
    error_code = "FEATURE_DISABLED"

    def __init__(
        self,
        feature: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["feature"] = feature
        super().__init__(
            message=f"The {feature} feature is disabled on this server",
            context=ctx,
        )
        self.feature = feature


class QueueUnavailableError(CatalogError):
    """
    Raised when the queue backend fails its health probe.

    HTTP:    503 Service Unavailable
    """

    status_code = 503
    error_code = "SERVICE_UNAVAILABLE"

    def __init__(
        self,
        message: str = "The job queue is currently unavailable",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(CatalogError):
    """
    Raised when database operations fail unexpectedly.

    What:    A query failed (connection lost, store unavailable, etc.).
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Driver details
    stay in `context` and are only logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class QueueServiceError(CatalogError):
    """
    Raised when enqueueing a job or reading queue statistics fails.

    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "The job queue request failed. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
