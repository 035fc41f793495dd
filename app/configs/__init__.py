from app.configs.settings import LimiterConfig, file_logger, settings

__all__ = [
    "LimiterConfig",
    "file_logger",
    "settings",
]
