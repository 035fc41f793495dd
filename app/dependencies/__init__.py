# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    AuthorRepoDep,
    CategoryRepoDep,
    PostListQuery,
    PostListQueryDep,
    PostRepoDep,
    PostServiceDep,
    PrincipalDep,
    SessionDep,
    get_author_repository,
    get_category_repository,
    get_current_principal,
    get_post_list_query,
    get_post_repository,
    get_post_service,
)

__all__ = [
    "AuthorRepoDep",
    "CategoryRepoDep",
    "PostListQuery",
    "PostListQueryDep",
    "PostRepoDep",
    "PostServiceDep",
    "PrincipalDep",
    "SessionDep",
    "get_author_repository",
    "get_category_repository",
    "get_current_principal",
    "get_post_list_query",
    "get_post_repository",
    "get_post_service",
]
