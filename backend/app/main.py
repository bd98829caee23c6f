"""
Catalog Backend - FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐ ┌────────┐  │
    │  │  Req ID  │→│  Logging    │→│ GZip │→│  CORS  │  │
    │  └──────────┘ └─────────────┘ └──────┘ └────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  /api/v1/tags   /api/v1/plans   /api/v1/queues      │
    │  /health                                            │
    │                                                     │
    │  Exception Handlers:                                │
    │  NotFound→404 │ FeatureDisabled→503 │ DB/Queue→500  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → configuration check → ready
    Shutdown: close queue client → dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.database import dispose_engine
from app.exceptions import (
    CatalogError,
    DatabaseError,
    FeatureDisabledError,
    NotFoundError,
    QueueServiceError,
    QueueUnavailableError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDFilter, RequestIDMiddleware, request_id_var
from app.routes import health, plans, queues, tags
from app.schemas.common import ErrorResponse
from app.services.queue_manager import queue_manager

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s
    The request id comes from RequestIDFilter ("-" outside a request).
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # Third-party loggers that are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: logging and configuration check. Shutdown: release connections."""
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Catalog Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: health checks and the untranslated listing still work
        logger.error("Configuration error: %s", str(e))

    logger.info("Translations root: %s", settings.translations_root)
    logger.info("Queues: %s", "enabled" if settings.queues_enabled else "disabled")
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Catalog Backend shutting down...")
    await queue_manager.close()
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, error: str, message: str, headers=None) -> JSONResponse:
    """Serialize the error envelope with the current request id."""
    body = ErrorResponse(
        success=False,
        error=error,
        message=message,
        request_id=request_id_var.get("") or None,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler map:
        NotFoundError           → 404 NOT_FOUND
        RequestValidationError  → 422 VALIDATION_ERROR
        FeatureDisabledError    → 503 FEATURE_DISABLED
        QueueUnavailableError   → 503 SERVICE_UNAVAILABLE
        DatabaseError           → 500 INTERNAL_ERROR (generic message)
        QueueServiceError       → 500 INTERNAL_ERROR
        CatalogError (base)     → 500 INTERNAL_ERROR
        Exception (fallback)    → 500 INTERNAL_ERROR

    Context dicts and stack traces are logged server-side only.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.info("Not found: %s", exc.message)
        return _error_response(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        logger.warning("Request validation failed: %s", exc.errors())
        return _error_response(422, "VALIDATION_ERROR", "The request body is invalid")

    @app.exception_handler(FeatureDisabledError)
    async def handle_feature_disabled(request: Request, exc: FeatureDisabledError):
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return _error_response(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(QueueUnavailableError)
    async def handle_queue_unavailable(request: Request, exc: QueueUnavailableError):
        logger.warning("Queue unavailable: %s", exc.message)
        return _error_response(
            exc.status_code, exc.error_code, exc.message, headers={"Retry-After": "30"}
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return _error_response(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(QueueServiceError)
    async def handle_queue_error(request: Request, exc: QueueServiceError):
        logger.error("Queue error: %s | Context: %s", exc.message, exc.context)
        return _error_response(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(CatalogError)
    async def handle_catalog_error(request: Request, exc: CatalogError):
        logger.error("Application error: %s | Context: %s", exc.message, exc.context)
        return _error_response(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return _error_response(
            500,
            "INTERNAL_ERROR",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Catalog API",
        description=(
            "Subscription plans, tag lookup with translation enrichment, "
            "and background job queue administration."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(tags.router)
    app.include_router(plans.router)
    app.include_router(queues.router)
    app.include_router(health.router)

    return app


# uvicorn entry point: `uvicorn app.main:app`
app = create_app()
