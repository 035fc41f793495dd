from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from app.managers.metrics import MetricsManager, RequestTimer

P = ParamSpec("P")
R = TypeVar("R")


def timed(
    endpoint: str | None = None,
    metrics: MetricsManager | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Record call count, latency and failures of an async route handler.

    Args:
        endpoint: Metrics key (defaults to the function name).
        metrics: Metrics manager (defaults to the global instance).

    Returns:
        Decorator preserving the wrapped signature, so FastAPI still sees
        the handler's parameters.

    Example:
        @timed("/posts/list")
        async def list_posts(request: Request) -> list[PostSummaryResponse]:
            ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        key = endpoint or func.__name__

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            async with RequestTimer(key, metrics):
                return await func(*args, **kwargs)

        return wrapper

    return decorator
