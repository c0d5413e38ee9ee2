"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures middleware, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from psycopg_pool import ConnectionPool

from mailgate.adapters.repository.postgres import run_migrations
from mailgate.api.routes import router
from mailgate.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "accounts",
        "description": "Register accounts, verify email tokens and retrieve public keys",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates database connection pool on startup
    - Runs migrations on startup
    - Closes connection pool on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")
    logger.info("Connecting to database...")

    # Bounded waits: pool checkout and per-statement server timeout
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        timeout=settings.db_pool_timeout_seconds,
        kwargs={"options": f"-c statement_timeout={settings.db_statement_timeout_ms}"},
        open=True,
    )

    logger.info("Running database migrations...")
    run_migrations(pool)

    # Store pool in app state for dependency injection
    app.state.pool = pool

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    pool.close()
    logger.info("Database connection pool closed")


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies are client input errors (400), not 422."""
    # Field locations only; error inputs may contain passwords
    locations = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
    logger.info("Rejected malformed request to %s: %s", request.url.path, locations)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request body"},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log internal failures server-side; return a generic 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app() -> FastAPI:
    """Build the FastAPI application with routes, middleware and handlers."""
    settings = get_settings()

    application = FastAPI(
        title="mailgate",
        description="Account registration and email verification API",
        version="0.1.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    application.add_exception_handler(Exception, unhandled_exception_handler)

    application.include_router(router, prefix="/api")
    return application


app = create_app()
