"""
Catalog Backend - Request Logging Middleware
==============================================

What:  One access-log line per HTTP request.
How:   Measures time around the downstream call and logs method, path,
       query string, status and duration on the `catalog.access` logger.
When:  Runs inside RequestIDMiddleware, so the request ID is available.

Example line:
    2026-01-15T12:00:00 [INFO] catalog.access: GET /api/v1/tags?lang=fr 200 12.3ms [a1b2c3d4] from 10.0.0.7

Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("catalog.access")

# Probed every few seconds by orchestrators
QUIET_PATHS = frozenset({"/health"})


def _status_level(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with its outcome and duration."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        client_ip = request.client.host if request.client else "unknown"
        target = f"{path}?{request.url.query}" if request.url.query else path
        status = response.status_code
        rid = request_id_var.get("")

        logger.log(
            _status_level(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            target,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
