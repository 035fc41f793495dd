from app.errors.auth import UnauthorizedError, auth_exception_handler
from app.errors.base import BaseAppError, create_exception_handler
from app.errors.database import (
    DatabaseConnectionError,
    DuplicateEntryError,
    NotFoundError,
    StoreError,
    database_exception_handler,
)
from app.errors.validation import (
    ValidationError,
    validation_error_handler,
    validation_exception_handler,
)

__all__ = [
    "BaseAppError",
    "DatabaseConnectionError",
    "DuplicateEntryError",
    "NotFoundError",
    "StoreError",
    "UnauthorizedError",
    "ValidationError",
    "auth_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "validation_error_handler",
    "validation_exception_handler",
]
