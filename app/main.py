# app/main.py

"""Blog Posts Backend - post CRUD with keyword tags over SQLModel."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from starlette.responses import JSONResponse
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.configs import settings
from app.db import check_db
from app.errors import (
    DuplicateEntryError,
    NotFoundError,
    StoreError,
    UnauthorizedError,
    ValidationError,
    auth_exception_handler,
    database_exception_handler,
    validation_error_handler,
    validation_exception_handler,
)
from app.managers import (
    collect_host_metrics,
    limiter,
    metrics_manager,
    rate_limit_exceeded_handler,
)
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.routes import post_router
from app.schemas import HealthCheckResponse
from app.utils.helpers import today_str

app = FastAPI(
    title=settings.APP_NAME,
    description="Blog post CRUD API with keyword tag extraction",
    version="1.0.0",
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

app.include_router(post_router, prefix=settings.API_PREFIX)

errors = [
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (UnauthorizedError, auth_exception_handler),
    (NotFoundError, database_exception_handler),
    (DuplicateEntryError, database_exception_handler),
    (StoreError, database_exception_handler),
    (ValidationError, validation_error_handler),
    (RequestValidationError, validation_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter
limiter: Limiter = app.state.limiter


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "ok",
                        "timestamp": "2025-01-01",
                        "database": "reachable",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> HealthCheckResponse:
    """
    Health check endpoint.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    HealthCheckResponse
        API version and database reachability. `status` is "degraded" when the
        database does not answer.
    """
    reachable = await check_db()
    return HealthCheckResponse(
        version=app.version,
        status="ok" if reachable else "degraded",
        timestamp=today_str(),
        database="reachable" if reachable else "unreachable",
    )


@app.get(
    "/metrics",
    tags=["📈 Metrics"],
    response_class=ORJSONResponse,
    summary="Get metrics",
    description="Get API performance metrics.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "timestamp": "2025-01-01",
                        "api_metrics": {"calls": {"/posts/list": 100}, "throttled": 0},
                        "host_metrics": {"cpu_percent": 4.2},
                    },
                },
            },
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
        },
    },
    operation_id="get_metrics",
)
@limiter.limit("5/minute")
async def get_metrics(request: Request, response: Response) -> ORJSONResponse:
    """
    Get API performance metrics.

    Notes
    -----
    Rate limited to 5 requests per minute.
    """
    return ORJSONResponse(
        content={
            "timestamp": today_str(),
            "api_metrics": metrics_manager.snapshot(),
            "host_metrics": await collect_host_metrics(),
        },
    )


@app.get(
    "/",
    tags=["🏠 Root"],
    summary="Root access",
    response_model=dict[str, str],
    response_class=JSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"message": "Welcome to Blog Posts Backend"},
                },
            },
        },
    },
    operation_id="root_access",
)
@limiter.limit("5/minute")
async def root(request: Request, response: Response) -> JSONResponse:
    """Root endpoint."""
    return JSONResponse(content={"message": f"Welcome to {settings.APP_NAME}"})


if __name__ == "__main__":
    from uvicorn import run

    run(
        "app.main:app",
        host="127.0.0.1",
        port=8000,
        log_level="info",
        reload=True,
        loop="uvloop",
        http="httptools",
    )
