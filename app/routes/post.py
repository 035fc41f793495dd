# app/routes/post.py

"""
Post Routes.

CRUD endpoints for blog posts.

Summary
-------
Endpoints include:
  - List posts (optionally filtered by author uid and/or category slug)
  - Get post by pid
  - Create post
  - Edit post
  - Delete post

Dependencies
------------
  - `PostServiceDep`: The post pipeline bound to the request's database session.
  - `PrincipalDep`: Runs the authorization hook; required by create, edit and delete.

Rate Limiting
-------------
All endpoints define explicit limits. Tiered limits apply when `X-API-Key` is
present, offering higher throughput for identified clients.
"""

from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Body, Request
from fastapi.responses import ORJSONResponse

from app.configs import file_logger
from app.decorators import timed
from app.dependencies import PostListQueryDep, PostServiceDep, PrincipalDep
from app.managers import limiter
from app.schemas import (
    PostCreate,
    PostResponse,
    PostSnapshot,
    PostSummaryResponse,
    PostUpdate,
)

router = APIRouter(tags=["📝 Posts"])

logger = file_logger(getLogger(__name__))

NOT_FOUND_RESPONSE = {
    "description": "Not found",
    "content": {"application/json": {"example": {"detail": "Post '<pid>' not found"}}},
}
UNAUTHORIZED_RESPONSE = {
    "description": "Unauthorized",
    "content": {"application/json": {"example": {"detail": "Not authenticated"}}},
}
RATE_LIMIT_RESPONSE = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}


@router.get(
    "/posts",
    response_class=ORJSONResponse,
    response_model=list[PostSummaryResponse],
    summary="List posts",
    description=(
        "List post summaries. `author` keeps posts by that author uid, `cat` keeps "
        "posts having that category slug; given together both must match."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": [
                        {
                            "pid": "9f1c2b7e5d3a4c6b8e0f1a2b3c4d5e6f",
                            "title": "Getting started with asyncio",
                            "description": "A gentle introduction",
                            "postURL": "/api/post/9f1c2b7e5d3a4c6b8e0f1a2b3c4d5e6f",
                            "authorURL": "/api/author/jdoe",
                            "categoriesURL": ["/api/category/python"],
                            "createdAt": "2025-01-01 10:00:00",
                            "updatedAt": "No updates",
                        },
                    ],
                },
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="posts_list",
)
@timed("/posts/list")
@limiter.limit(lambda key: "60/minute" if "apikey" in key else "30/minute")
async def list_posts(
    request: Request,
    query: PostListQueryDep,
    service: PostServiceDep,
) -> list[PostSummaryResponse]:
    """
    List posts.

    Parameters
    ----------
    request : Request
        Current request context.
    query : PostListQuery
        Author and category filters.
    service : PostService
        Post pipeline.

    Returns
    -------
    list[PostSummaryResponse]
        Matching post summaries.
    """
    return await service.list_posts(author_uid=query.author, category_slug=query.cat)


@router.get(
    "/post/{pid}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Get post by pid",
    description="Retrieve a post with its tags and author/category links.",
    responses={404: NOT_FOUND_RESPONSE, 429: RATE_LIMIT_RESPONSE},
    operation_id="posts_get",
)
@timed("/post/get")
@limiter.limit(lambda key: "60/minute" if "apikey" in key else "30/minute")
async def get_post(
    request: Request,
    pid: str,
    service: PostServiceDep,
) -> PostResponse:
    """
    Get a single post.

    Raises
    ------
    NotFoundError
        If no post has `pid`.
    """
    return await service.get_post(pid)


@router.post(
    "/posts",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Create a new post",
    description=(
        "Create a post. Tags are extracted from `content`; `author` is an author "
        "uid and `categories` a list of category slugs, all of which must exist."
    ),
    responses={
        401: UNAUTHORIZED_RESPONSE,
        404: {
            "description": "Unknown author or category",
            "content": {
                "application/json": {"example": {"detail": "Category 'golang' not found"}},
            },
        },
        422: {
            "description": "Invalid body",
            "content": {
                "application/json": {"example": {"detail": "Post content is required"}},
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="posts_create",
)
@timed("/posts/create")
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "5/minute")
async def create_post(
    request: Request,
    post: Annotated[
        PostCreate,
        Body(
            examples=[
                {
                    "title": "Getting started with asyncio",
                    "description": "A gentle introduction",
                    "content": "Coroutines let a single thread juggle many sockets.",
                    "author": "jdoe",
                    "categories": ["python", "concurrency"],
                },
            ],
        ),
    ],
    service: PostServiceDep,
    principal: PrincipalDep,
) -> PostResponse:
    """
    Create a post.

    Raises
    ------
    ValidationError
        If content is missing.
    NotFoundError
        If the author or a category does not exist.
    """
    created = await service.create_post(post)
    logger.info(f"Post {created.pid} created by principal {principal.subject}")
    return created


@router.put(
    "/post/{pid}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Edit a post",
    description=(
        "Change any of title, description, content and categories. New content "
        "re-derives tags; new categories replace the existing list."
    ),
    responses={
        401: UNAUTHORIZED_RESPONSE,
        404: NOT_FOUND_RESPONSE,
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="posts_edit",
)
@timed("/post/edit")
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "5/minute")
async def edit_post(
    request: Request,
    pid: str,
    update: PostUpdate,
    service: PostServiceDep,
    principal: PrincipalDep,
) -> PostResponse:
    """
    Edit a post.

    Raises
    ------
    NotFoundError
        If the post or one of the categories does not exist.
    """
    updated = await service.edit_post(pid, update)
    logger.info(f"Post {pid} edited by principal {principal.subject}")
    return updated


@router.delete(
    "/post/{pid}",
    response_class=ORJSONResponse,
    response_model=PostSnapshot,
    summary="Delete a post",
    description="Delete a post and return it as it was stored.",
    responses={
        401: UNAUTHORIZED_RESPONSE,
        404: NOT_FOUND_RESPONSE,
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="posts_delete",
)
@timed("/post/delete")
@limiter.limit(lambda key: "10/minute" if "apikey" in key else "2/minute")
async def delete_post(
    request: Request,
    pid: str,
    service: PostServiceDep,
    principal: PrincipalDep,
) -> PostSnapshot:
    """
    Delete a post.

    Raises
    ------
    NotFoundError
        If no post has `pid`, including a second delete of the same post.
    """
    removed = await service.delete_post(pid)
    logger.info(f"Post {pid} deleted by principal {principal.subject}")
    return removed
