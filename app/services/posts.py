"""
Post pipeline.

Orchestrates the post operations exposed over HTTP: tag extraction on every
content write, author/category resolution on every reference write, and
response shaping on every read.
"""

from logging import getLogger

from app.configs import file_logger
from app.errors.database import NotFoundError
from app.errors.validation import ValidationError
from app.models import PostDB
from app.repositories.protocols import AuthorStore, CategoryStore, PostStore
from app.schemas.post import (
    PostCreate,
    PostResponse,
    PostSnapshot,
    PostSummaryResponse,
    PostUpdate,
)
from app.schemas.refs import PopulatedPost
from app.services.keywords import extract_keywords
from app.services.resolver import RelationshipResolver
from app.services.shaper import shape_post, shape_post_summary, snapshot_post

logger = file_logger(getLogger(__name__))


def matches_filters(
    populated: PopulatedPost,
    author_uid: str | None = None,
    category_slug: str | None = None,
) -> bool:
    """
    Check a post against the listing filters.

    Every filter that is given must match; no filters match everything.

    Args:
        populated: Post with dereferenced references
        author_uid: Required author uid
        category_slug: Slug that must be among the post's categories

    Returns:
        bool: True if the post should be listed
    """
    if author_uid is not None and populated.author.uid != author_uid:
        return False
    if category_slug is not None:
        return any(category.slug == category_slug for category in populated.categories)
    return True


class PostService:
    """
    Post pipeline over injected store capabilities.

    Args:
        posts: Post persistence
        authors: Author lookup
        categories: Category lookup
    """

    def __init__(
        self,
        posts: PostStore,
        authors: AuthorStore,
        categories: CategoryStore,
    ) -> None:
        self.posts = posts
        self.resolver = RelationshipResolver(authors, categories)

    async def list_posts(
        self,
        author_uid: str | None = None,
        category_slug: str | None = None,
    ) -> list[PostSummaryResponse]:
        """
        List post summaries, optionally filtered by author and/or category.

        Filtering happens after all posts are fetched and dereferenced.

        Args:
            author_uid: Keep only posts by this author
            category_slug: Keep only posts in this category

        Returns:
            list[PostSummaryResponse]: Matching posts
        """
        populated = await self.posts.populate(await self.posts.get_all())
        return [
            shape_post_summary(item)
            for item in populated
            if matches_filters(item, author_uid, category_slug)
        ]

    async def get_post(self, pid: str) -> PostResponse:
        """
        Fetch one post.

        Raises:
            NotFoundError: If no post has `pid`
        """
        post = await self._get_or_raise(pid)
        return shape_post(await self._populate_one(post))

    async def create_post(self, data: PostCreate) -> PostResponse:
        """
        Create a post from a request body.

        Args:
            data: Title, description, content, author uid and category slugs

        Returns:
            PostResponse: Stored post, including its extracted tags

        Raises:
            ValidationError: If content is missing
            NotFoundError: If the author or a category does not exist
            StoreError: If the post cannot be stored
        """
        if data.content is None or not data.content.strip():
            raise ValidationError(
                detail="Post content is required",
                errors=[{"field": "content", "message": "Field required"}],
            )

        tags = extract_keywords(data.content)
        author = await self.resolver.resolve_author(data.author)
        categories = await self.resolver.resolve_categories(data.categories)

        created = await self.posts.create(
            PostDB(
                title=data.title,
                description=data.description,
                content=data.content,
                tags=tags,
                author_id=author.id,
            ),
            [category.id for category in categories],
        )
        populated = await self._populate_one(created)
        await self.posts.commit()
        logger.info(f"Created post {created.pid} by {author.uid} with {len(tags)} tags")
        return shape_post(populated)

    async def edit_post(self, pid: str, data: PostUpdate) -> PostResponse:
        """
        Apply a partial update.

        Only supplied fields change. New content brings freshly extracted
        tags in the same write; new categories replace the old list.

        Args:
            pid: Post pid
            data: Fields to change

        Returns:
            PostResponse: Updated post

        Raises:
            NotFoundError: If the post or a category does not exist
            StoreError: If the change cannot be stored
        """
        await self._get_or_raise(pid)

        values = data.model_dump(exclude_unset=True, exclude_none=True)
        changed = sorted(values)
        slugs = values.pop("categories", None)
        if "content" in values:
            values["tags"] = extract_keywords(values["content"])

        categories = None
        if slugs is not None:
            categories = await self.resolver.resolve_categories(slugs)

        updated = await self.posts.update_by_pid(pid, values)
        if updated is None:
            raise NotFoundError(detail=f"Post '{pid}' not found")

        if categories is not None:
            await self.posts.replace_categories(
                updated.id,
                [category.id for category in categories],
            )

        populated = await self._populate_one(updated)
        await self.posts.commit()
        logger.info(f"Edited post {pid}: {changed}")
        return shape_post(populated)

    async def delete_post(self, pid: str) -> PostSnapshot:
        """
        Delete a post.

        Args:
            pid: Post pid

        Returns:
            PostSnapshot: The post as stored before removal

        Raises:
            NotFoundError: If no post has `pid`
            StoreError: If the removal cannot be stored
        """
        removed = await self.posts.delete_by_pid(pid)
        if removed is None:
            raise NotFoundError(detail=f"Post '{pid}' not found")
        post, category_ids = removed
        await self.posts.commit()
        logger.info(f"Deleted post {pid}")
        return snapshot_post(post, category_ids)

    async def _get_or_raise(self, pid: str) -> PostDB:
        post = await self.posts.get_by_pid(pid)
        if post is None:
            raise NotFoundError(detail=f"Post '{pid}' not found")
        return post

    async def _populate_one(self, post: PostDB) -> PopulatedPost:
        [populated] = await self.posts.populate([post])
        return populated
