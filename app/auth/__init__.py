from app.auth.authorizer import Authorizer, BearerTokenAuthorizer, get_authorizer

__all__ = ["Authorizer", "BearerTokenAuthorizer", "get_authorizer"]
