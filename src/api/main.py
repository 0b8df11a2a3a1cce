"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures middleware, exception handlers, and lifespan events.
"""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.adapters.repository.csv_log import CsvRegistrationStore
from src.api.dependencies import create_registration_service
from src.api.models import (
    FieldErrorDetail,
    HealthResponse,
    RateLimitResponse,
    ValidationErrorResponse,
)
from src.api.rate_limit import FixedWindowRateLimiter, RateLimitExceeded, enforce_general_limit
from src.api.v1 import router as v1_router
from src.config.logging_config import setup_logging
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

AVAILABLE_ENDPOINTS = [
    "GET /",
    "GET /health",
    "GET /api/v1/stats",
    "POST /api/v1/register",
]

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Competition Registration API v1 - Register students and view statistics",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Configures logging and opens the registration store on startup
    - Wires the registration service and rate limiters
    - Waits for pending operator notices on shutdown
    """
    settings = get_settings()
    setup_logging(settings)

    logger.info("Starting application...")
    store = CsvRegistrationStore.open(settings.registrations_file)
    service = create_registration_service(settings, store)

    app.state.store = store
    app.state.registration_service = service
    app.state.settings = settings
    app.state.started_at = time.monotonic()
    app.state.general_limiter = FixedWindowRateLimiter(
        limit=settings.general_rate_limit,
        window_seconds=settings.rate_window_seconds,
    )
    app.state.register_limiter = FixedWindowRateLimiter(
        limit=settings.register_rate_limit,
        window_seconds=settings.rate_window_seconds,
        error="Too many registration attempts",
        message=(
            f"Please try again later. You can only register {settings.register_rate_limit} "
            f"times per {settings.rate_window_seconds // 60} minutes."
        ),
    )

    logger.info(f"Email service: {'Configured' if settings.email_configured else 'Not configured'}")
    logger.info(f"Environment: {settings.environment}")
    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    service.close()
    logger.info("Pending notifications flushed")


app = FastAPI(
    title="competition-registration",
    description="Registration intake API for the Online Astronomy Competition",
    version=VERSION,
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include v1 API routes
app.include_router(v1_router, prefix="/api/v1", dependencies=[Depends(enforce_general_limit)])


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    body = RateLimitResponse(error=exc.error, message=exc.message, retry_after=exc.retry_after)
    return JSONResponse(
        status_code=429,
        content=body.model_dump(by_alias=True),
        headers={"Retry-After": str(exc.retry_after)},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Only reachable for bodies that are not JSON at all
    body = ValidationErrorResponse(
        details=[FieldErrorDetail(field="body", message="Request body must be a JSON object")]
    )
    return JSONResponse(status_code=400, content=body.model_dump(by_alias=True))


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code != 404:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )
    return JSONResponse(
        status_code=404,
        content={
            "error": "Not found",
            "message": "The requested endpoint does not exist.",
            "availableEndpoints": AVAILABLE_ENDPOINTS,
        },
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": "Something went wrong on our end. Please try again later.",
        },
    )


@app.get("/")
async def root() -> dict[str, object]:
    """Service information and available endpoints."""
    return {
        "message": "Online Astronomy Competition API",
        "version": VERSION,
        "status": "active",
        "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        "endpoints": AVAILABLE_ENDPOINTS,
    }


@app.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    Liveness check.

    Reports uptime and whether email delivery is configured.
    """
    settings = getattr(request.app.state, "settings", None) or get_settings()
    started_at = getattr(request.app.state, "started_at", None)
    uptime = time.monotonic() - started_at if started_at is not None else 0.0
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        uptime_seconds=round(uptime, 3),
        environment=settings.environment,
        email_configured=settings.email_configured,
    )
