from app.schemas.auth import Principal
from app.schemas.health import HealthCheckResponse
from app.schemas.post import (
    PostCreate,
    PostResponse,
    PostSnapshot,
    PostSummaryResponse,
    PostUpdate,
)
from app.schemas.refs import AuthorRef, CategoryRef, PopulatedPost

__all__ = [
    "AuthorRef",
    "CategoryRef",
    "HealthCheckResponse",
    "PopulatedPost",
    "PostCreate",
    "PostResponse",
    "PostSnapshot",
    "PostSummaryResponse",
    "PostUpdate",
    "Principal",
]
