"""Store capabilities the post pipeline depends on."""

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable
from uuid import UUID

from app.models import AuthorDB, CategoryDB, PostDB
from app.schemas.refs import PopulatedPost


@runtime_checkable
class AuthorStore(Protocol):
    """Point lookup of authors by uid."""

    async def get_by_uid(self, uid: str) -> AuthorDB | None:
        """Return the author with `uid`, if any."""
        ...


@runtime_checkable
class CategoryStore(Protocol):
    """Point lookup of categories by slug."""

    async def get_by_slug(self, slug: str) -> CategoryDB | None:
        """Return the category with `slug`, if any."""
        ...


@runtime_checkable
class PostStore(Protocol):
    """
    Persistence of posts.

    `PostRepository` implements this against SQL; tests use an in-memory
    implementation.
    """

    async def create(self, post: PostDB, category_ids: Sequence[UUID]) -> PostDB:
        """Insert a post and its ordered category references."""
        ...

    async def get_by_pid(self, pid: str) -> PostDB | None:
        """Return the post with `pid`, if any."""
        ...

    async def get_all(self) -> list[PostDB]:
        """Return every post."""
        ...

    async def update_by_pid(self, pid: str, values: dict[str, Any]) -> PostDB | None:
        """Atomically set `values` on the post with `pid`."""
        ...

    async def replace_categories(self, post_id: UUID, category_ids: Sequence[UUID]) -> None:
        """Replace a post's category references."""
        ...

    async def delete_by_pid(self, pid: str) -> tuple[PostDB, list[UUID]] | None:
        """Remove the post with `pid` and return it with its category keys."""
        ...

    async def populate(self, posts: Sequence[PostDB]) -> list[PopulatedPost]:
        """Dereference author and categories."""
        ...

    async def commit(self) -> None:
        """Make the writes of the current unit of work durable."""
        ...
