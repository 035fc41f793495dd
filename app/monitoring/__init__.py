from app.monitoring.logging import (
    bind_request_id,
    clear_context,
    configure_logging,
    redact_secrets,
    sanitize_headers,
    sanitize_log_message,
)

__all__ = [
    "bind_request_id",
    "clear_context",
    "configure_logging",
    "redact_secrets",
    "sanitize_headers",
    "sanitize_log_message",
]
