"""Conversion of dereferenced posts into their transport representation."""

from uuid import UUID

from app.configs import settings
from app.models import PostDB
from app.schemas.post import PostResponse, PostSnapshot, PostSummaryResponse
from app.schemas.refs import CategoryRef, PopulatedPost
from app.utils.helpers import format_datetime


def author_url(uid: str, prefix: str | None = None) -> str:
    return f"{settings.API_PREFIX if prefix is None else prefix}/author/{uid}"


def category_url(slug: str, prefix: str | None = None) -> str:
    return f"{settings.API_PREFIX if prefix is None else prefix}/category/{slug}"


def post_url(pid: str, prefix: str | None = None) -> str:
    return f"{settings.API_PREFIX if prefix is None else prefix}/post/{pid}"


def _categories_url(categories: tuple[CategoryRef, ...], prefix: str | None) -> list[str]:
    return [category_url(category.slug, prefix) for category in categories]


def shape_post(populated: PopulatedPost, prefix: str | None = None) -> PostResponse:
    """
    Build the full transport representation of a post.

    The embedded author and categories are replaced by `authorURL` and
    `categoriesURL`; the storage key and version marker are dropped.

    Args:
        populated: Post with dereferenced references
        prefix: URL prefix (defaults to the configured API prefix)

    Returns:
        PostResponse: Transport representation
    """
    post = populated.post
    return PostResponse(
        pid=post.pid,
        title=post.title,
        description=post.description,
        content=post.content,
        tags=list(post.tags),
        author_url=author_url(populated.author.uid, prefix),
        categories_url=_categories_url(populated.categories, prefix),
        created_at=format_datetime(post.created_at),
        updated_at=format_datetime(post.updated_at),
    )


def shape_post_summary(
    populated: PopulatedPost,
    prefix: str | None = None,
) -> PostSummaryResponse:
    """
    Build the list-item representation of a post.

    Same links as `shape_post` plus `postURL`; content and tags are left out.

    Args:
        populated: Post with dereferenced references
        prefix: URL prefix (defaults to the configured API prefix)

    Returns:
        PostSummaryResponse: Transport representation
    """
    post = populated.post
    return PostSummaryResponse(
        pid=post.pid,
        title=post.title,
        description=post.description,
        post_url=post_url(post.pid, prefix),
        author_url=author_url(populated.author.uid, prefix),
        categories_url=_categories_url(populated.categories, prefix),
        created_at=format_datetime(post.created_at),
        updated_at=format_datetime(post.updated_at),
    )


def snapshot_post(post: PostDB, category_ids: list[UUID]) -> PostSnapshot:
    """Build the undereferenced snapshot of a removed post."""
    return PostSnapshot.model_validate(
        {
            "pid": post.pid,
            "title": post.title,
            "description": post.description,
            "content": post.content,
            "tags": list(post.tags),
            "author": post.author_id,
            "categories": category_ids,
            "created_at": format_datetime(post.created_at),
            "updated_at": format_datetime(post.updated_at),
        },
    )
