"""
Authorization hook for mutating post routes.

Routes depend on an `Authorizer`, never on a concrete token scheme. The
default implementation accepts JWT bearer access tokens; deployments can
swap it by overriding `get_authorizer`.
"""

from logging import getLogger
from typing import Protocol, runtime_checkable

from fastapi import Request
from fastapi.security.utils import get_authorization_scheme_param

from app.configs import file_logger
from app.errors.auth import UnauthorizedError
from app.managers.token_manager import decode_access_token
from app.schemas.auth import Principal
from app.utils.helpers import host

logger = file_logger(getLogger(__name__))


@runtime_checkable
class Authorizer(Protocol):
    """Decides whether a request may modify posts."""

    async def authorize(self, request: Request) -> Principal:
        """
        Return the principal behind `request`.

        Raises:
            UnauthorizedError: If the request carries no acceptable credentials
        """
        ...


class BearerTokenAuthorizer:
    """Accepts `Authorization: Bearer <access token>` headers."""

    scheme = "bearer"

    async def authorize(self, request: Request) -> Principal:
        scheme, token = get_authorization_scheme_param(request.headers.get("Authorization"))
        if scheme.lower() != self.scheme or not token.strip():
            logger.warning(f"Missing bearer token from ip: {host(request)}")
            raise UnauthorizedError("Not authenticated")

        principal = decode_access_token(token.strip())
        if principal is None:
            logger.warning(f"Invalid bearer token from ip: {host(request)}")
            raise UnauthorizedError()
        return principal


def get_authorizer() -> Authorizer:
    """Resolve the authorizer used by mutating routes."""
    return BearerTokenAuthorizer()
