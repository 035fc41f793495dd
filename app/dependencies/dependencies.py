# app/dependencies/dependencies.py

"""Application dependencies: per-request stores, the post pipeline and authorization."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import Authorizer, get_authorizer
from app.db import get_session
from app.repositories import AuthorRepository, CategoryRepository, PostRepository
from app.schemas.auth import Principal
from app.services import PostService

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_post_repository(session: SessionDep) -> PostRepository:
    """Resolve the `PostRepository` bound to the request's session."""
    return PostRepository(session)


def get_author_repository(session: SessionDep) -> AuthorRepository:
    """Resolve the `AuthorRepository` bound to the request's session."""
    return AuthorRepository(session)


def get_category_repository(session: SessionDep) -> CategoryRepository:
    """Resolve the `CategoryRepository` bound to the request's session."""
    return CategoryRepository(session)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]
AuthorRepoDep = Annotated[AuthorRepository, Depends(get_author_repository)]
CategoryRepoDep = Annotated[CategoryRepository, Depends(get_category_repository)]


def get_post_service(
    posts: PostRepoDep,
    authors: AuthorRepoDep,
    categories: CategoryRepoDep,
) -> PostService:
    """
    Build the post pipeline for one request.

    FastAPI caches `get_session` per request, so all three stores share the
    same session and therefore the same transaction.
    """
    return PostService(posts, authors, categories)


PostServiceDep = Annotated[PostService, Depends(get_post_service)]


async def get_current_principal(
    request: Request,
    authorizer: Annotated[Authorizer, Depends(get_authorizer)],
) -> Principal:
    """
    Run the authorization hook for the current request.

    Raises:
        UnauthorizedError: If the authorizer rejects the request
    """
    return await authorizer.authorize(request)


PrincipalDep = Annotated[Principal, Depends(get_current_principal)]


@dataclass(frozen=True)
class PostListQuery:
    """
    Query container for post listing filters.

    Parameters
    ----------
    author : str | None
        Author uid filter.
    cat : str | None
        Category slug filter.
    """

    author: str | None = None
    cat: str | None = None


def get_post_list_query(
    author: Annotated[str | None, Query(description="Keep posts by this author uid")] = None,
    cat: Annotated[str | None, Query(description="Keep posts in this category slug")] = None,
) -> PostListQuery:
    """
    Dependency to construct `PostListQuery` from query parameters.

    Empty values are treated as absent.
    """
    return PostListQuery(author=author or None, cat=cat or None)


PostListQueryDep = Annotated[PostListQuery, Depends(get_post_list_query)]
