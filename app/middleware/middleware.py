# app/middleware/middleware.py
"""
Middleware components for the Blog Posts backend.

This module contains the request logging, security header and CORS
middleware, plus the lifespan handler that prepares the database and
releases the connection pool and limiter storage on shutdown.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import basicConfig, getLogger
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from rich.logging import RichHandler
from rich.traceback import install
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.configs import file_logger, settings
from app.db import close_db, init_db
from app.managers.rate_limiter import close_limiter
from app.monitoring import bind_request_id, clear_context, configure_logging
from app.utils.helpers import get_summary, host

REQUEST_ID_HEADER = "X-Request-ID"

# --- Logging Configuration ---
basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(message)s",
    datefmt="%X",
    handlers=[RichHandler(rich_tracebacks=True)],
)
logger = file_logger(getLogger("rich"))

install()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Manage application startup and shutdown events."""
    if settings.ENVIRONMENT != "development":
        configure_logging()

    logger.info(f"Starting {app.title}...")

    try:
        if settings.LOG_TO_FILE:
            logger.info(f"Logging to file enabled: {settings.LOG_FILE}")
        await init_db()
        logger.info("Services initialized successfully")
        logger.info(f"  - Posts API: http://localhost:8000{settings.API_PREFIX}/posts")
        logger.info("  - API Documentation: http://localhost:8000/docs")
        logger.info("  - Health Check: http://localhost:8000/health")
    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    logger.info(f"Shutting down {app.title}...")

    try:
        await close_db()
        await close_limiter()
        logger.info("Services cleaned up successfully")
    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    if frontend_url := settings.PRODUCTION_FRONTEND_URL:
        allowed_origins.append(frontend_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Tag the request with an id, then log its summary and timing."""

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        bind_request_id(request_id)
        start_time = perf_counter()

        try:
            route_info = get_summary(request) or f"{request.method} {request.url.path}"
            logger.info(f"Request {request_id}: {route_info}, from ip: {host(request)}")

            response = await call_next(request)
            duration = perf_counter() - start_time

            logger.info(
                f"Response {request_id}: {response.status_code} for {request.method} "
                f"{request.url.path} in {duration:.2f}s",
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_context()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
