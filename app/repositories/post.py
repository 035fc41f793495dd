"""Post repository for database operations."""

from collections.abc import Sequence
from datetime import UTC, datetime
from logging import getLogger
from typing import Any
from uuid import UUID

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.configs import file_logger
from app.errors.database import StoreError
from app.models import CategoryDB, PostCategoryLink, PostDB
from app.repositories.author import AuthorRepository
from app.repositories.base import BaseRepository
from app.schemas.refs import AuthorRef, CategoryRef, PopulatedPost

logger = file_logger(getLogger(__name__))


class PostRepository(BaseRepository[PostDB]):
    """
    Repository for Post database operations.

    Category order is kept in the `post_categories` link table. Every write
    runs inside the caller's session transaction, so a failure part-way
    through leaves nothing behind once the session rolls back.
    """

    model = PostDB

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.authors = AuthorRepository(session)

    async def create(self, post: PostDB, category_ids: Sequence[UUID]) -> PostDB:
        """
        Insert a post and its category links.

        Args:
            post: Unsaved post
            category_ids: Internal category keys, in display order

        Returns:
            PostDB: Stored post
        """
        db_post = await self._add_and_refresh(post)
        await self._insert_links(db_post.id, category_ids)
        return db_post

    async def get_by_pid(self, pid: str) -> PostDB | None:
        """
        Get post by public identifier.

        Args:
            pid: Post pid

        Returns:
            PostDB | None: Post if found, None otherwise
        """
        result = await self._execute(
            select(PostDB).where(PostDB.pid == pid).execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> list[PostDB]:
        """
        Get every post in creation order.

        `created_at` keeps microseconds; `pid` only breaks exact ties.

        Returns:
            list[PostDB]: All posts
        """
        # pyrefly: ignore [bad-argument-type]
        result = await self._execute(select(PostDB).order_by(PostDB.created_at, PostDB.pid))
        return list(result.scalars().all())

    async def update_by_pid(self, pid: str, values: dict[str, Any]) -> PostDB | None:
        """
        Apply a partial update as one UPDATE statement.

        Content and tags arrive together in `values`, so readers never see one
        without the other. The version marker and timestamp move with them.

        Args:
            pid: Post pid
            values: Column values to set

        Returns:
            PostDB | None: Updated post if found, None otherwise
        """
        statement = (
            update(PostDB)
            .where(PostDB.pid == pid)
            .values(
                **values,
                version=PostDB.version + 1,
                updated_at=datetime.now(tz=UTC),
            )
            .returning(PostDB.id)
            .execution_options(synchronize_session=False)
        )
        result = await self._execute(statement)
        if result.scalar_one_or_none() is None:
            return None
        return await self.get_by_pid(pid)

    async def replace_categories(self, post_id: UUID, category_ids: Sequence[UUID]) -> None:
        """
        Replace the category list of a post.

        Args:
            post_id: Internal post key
            category_ids: New internal category keys, in display order
        """
        await self._execute(delete(PostCategoryLink).where(PostCategoryLink.post_id == post_id))
        await self._insert_links(post_id, category_ids)

    async def delete_by_pid(self, pid: str) -> tuple[PostDB, list[UUID]] | None:
        """
        Delete a post and return what was stored.

        Args:
            pid: Post pid

        Returns:
            tuple[PostDB, list[UUID]] | None: Removed post and its category
            keys, or None if no post has that pid
        """
        post_ids = select(PostDB.id).where(PostDB.pid == pid).scalar_subquery()
        links = await self._execute(
            select(PostCategoryLink.category_id)
            .where(PostCategoryLink.post_id == post_ids)
            .order_by(PostCategoryLink.position),
        )
        category_ids = list(links.scalars().all())

        await self._execute(delete(PostCategoryLink).where(PostCategoryLink.post_id == post_ids))
        result = await self._execute(
            delete(PostDB)
            .where(PostDB.pid == pid)
            .returning(PostDB)
            .execution_options(synchronize_session=False),
        )
        removed = result.scalar_one_or_none()
        if removed is None:
            return None
        return removed, category_ids

    async def populate(self, posts: Sequence[PostDB]) -> list[PopulatedPost]:
        """
        Dereference author and categories for a batch of posts.

        Uses one query for authors and one for category links regardless of
        batch size.

        Args:
            posts: Stored posts

        Returns:
            list[PopulatedPost]: Posts with references resolved, same order

        Raises:
            StoreError: If a post points at an author that no longer exists
        """
        if not posts:
            return []

        authors = await self.authors.get_many([post.author_id for post in posts])

        rows = await self._execute(
            select(PostCategoryLink.post_id, CategoryDB.id, CategoryDB.slug)
            .join(CategoryDB, CategoryDB.id == PostCategoryLink.category_id)
            .where(PostCategoryLink.post_id.in_([post.id for post in posts]))
            .order_by(PostCategoryLink.post_id, PostCategoryLink.position),
        )
        categories: dict[UUID, list[CategoryRef]] = {}
        for post_id, category_id, slug in rows.all():
            categories.setdefault(post_id, []).append(CategoryRef(id=category_id, slug=slug))

        populated = []
        for post in posts:
            author = authors.get(post.author_id)
            if author is None:
                mssg = f"Post {post.pid} references missing author {post.author_id}"
                logger.error(mssg)
                raise StoreError(detail=mssg)
            populated.append(
                PopulatedPost(
                    post=post,
                    author=AuthorRef(id=author.id, uid=author.uid),
                    categories=tuple(categories.get(post.id, ())),
                ),
            )
        return populated

    async def _insert_links(self, post_id: UUID, category_ids: Sequence[UUID]) -> None:
        if not category_ids:
            return
        await self._execute(
            insert(PostCategoryLink),
            [
                {"post_id": post_id, "position": position, "category_id": category_id}
                for position, category_id in enumerate(category_ids)
            ],
        )
