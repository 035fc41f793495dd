"""Authorization errors."""

from logging import getLogger

from starlette.status import HTTP_401_UNAUTHORIZED

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class UnauthorizedError(BaseAppError):
    """Raised when the authorization hook rejects a request."""

    def __init__(
        self,
        detail: str = "Could not validate credentials",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)
        self.headers = {"WWW-Authenticate": "Bearer"}


auth_exception_handler = create_exception_handler(logger)
