from app.managers.metrics import RequestTimer, collect_host_metrics, metrics_manager
from app.managers.rate_limiter import close_limiter, limiter, rate_limit_exceeded_handler
from app.managers.token_manager import create_access_token, decode_access_token

__all__ = [
    "RequestTimer",
    "close_limiter",
    "collect_host_metrics",
    "create_access_token",
    "decode_access_token",
    "limiter",
    "metrics_manager",
    "rate_limit_exceeded_handler",
]
