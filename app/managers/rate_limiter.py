# app/managers/rate_limiter.py

"""Rate limiter configuration using slowapi."""

from logging import getLogger
from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from app.configs import LimiterConfig, file_logger
from app.managers.metrics import metrics_manager
from app.utils.helpers import host

logger = file_logger(getLogger(__name__))


def get_identifier(request: Request) -> str:
    """
    Get unique identifier for rate limiting.

    Uses API key from header if available, otherwise falls back to IP address.

    Args:
        request: FastAPI request object.

    Returns:
        Unique identifier string.
    """
    api_key = request.headers.get("X-API-Key")
    if api_key:
        return f"apikey:{api_key}"

    remote_address = get_remote_address(request)
    return f"ip:{remote_address}"


limiter = Limiter(**LimiterConfig().model_dump(), key_func=get_identifier)


async def close_limiter() -> None:
    """
    Reset limiter storage.

    This should be called during application shutdown.
    """
    limiter.reset()
    logger.info("Rate limiter shutdown complete")


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle rate limit exceeded exceptions.

    Args:
        request: FastAPI request object.
        exc: RateLimitExceeded exception.

    Returns:
        JSON response with error details.
    """
    http_exc = cast(RateLimitExceeded, exc)
    metrics_manager.record_throttled()
    logger.warning(f"Rate limit exceeded for ip: {host(request)} at {request.url.path}")
    response = _rate_limit_exceeded_handler(request, http_exc)
    return ORJSONResponse(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        content={
            "detail": "Rate limit exceeded",
            "allowed_requests": http_exc.detail,
            "retry_after": response.headers.get("retry-after"),
        },
    )
