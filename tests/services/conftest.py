# tests/services/conftest.py
"""In-memory stores for exercising the post pipeline without a database."""

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

import pytest

from app.models import AuthorDB, CategoryDB, PostDB
from app.schemas.refs import AuthorRef, CategoryRef, PopulatedPost
from app.services import PostService


class InMemoryAuthorStore:
    def __init__(self, authors: Sequence[AuthorDB]) -> None:
        self.by_uid = {author.uid: author for author in authors}
        self.lookups: list[str] = []

    async def get_by_uid(self, uid: str) -> AuthorDB | None:
        self.lookups.append(uid)
        return self.by_uid.get(uid)


class InMemoryCategoryStore:
    def __init__(self, categories: Sequence[CategoryDB]) -> None:
        self.by_slug = {category.slug: category for category in categories}
        self.lookups: list[str] = []

    async def get_by_slug(self, slug: str) -> CategoryDB | None:
        self.lookups.append(slug)
        return self.by_slug.get(slug)


class InMemoryPostStore:
    """Dict-backed `PostStore` mirroring `PostRepository` semantics."""

    def __init__(self, authors: InMemoryAuthorStore, categories: InMemoryCategoryStore) -> None:
        self.authors = authors
        self.categories = categories
        self.posts: dict[str, PostDB] = {}
        self.links: dict[UUID, list[UUID]] = {}
        self.updates: list[dict[str, Any]] = []
        self.commits = 0
        self.commit_error: Exception | None = None

    async def create(self, post: PostDB, category_ids: Sequence[UUID]) -> PostDB:
        self.posts[post.pid] = post
        self.links[post.id] = list(category_ids)
        return post

    async def get_by_pid(self, pid: str) -> PostDB | None:
        return self.posts.get(pid)

    async def get_all(self) -> list[PostDB]:
        return sorted(self.posts.values(), key=lambda post: (post.created_at, post.pid))

    async def update_by_pid(self, pid: str, values: dict[str, Any]) -> PostDB | None:
        post = self.posts.get(pid)
        if post is None:
            return None
        self.updates.append(dict(values))
        for key, value in values.items():
            setattr(post, key, value)
        post.version += 1
        post.updated_at = datetime.now(tz=UTC)
        return post

    async def replace_categories(self, post_id: UUID, category_ids: Sequence[UUID]) -> None:
        self.links[post_id] = list(category_ids)

    async def delete_by_pid(self, pid: str) -> tuple[PostDB, list[UUID]] | None:
        post = self.posts.pop(pid, None)
        if post is None:
            return None
        return post, self.links.pop(post.id, [])

    async def commit(self) -> None:
        if self.commit_error is not None:
            raise self.commit_error
        self.commits += 1

    async def populate(self, posts: Sequence[PostDB]) -> list[PopulatedPost]:
        authors = {author.id: author for author in self.authors.by_uid.values()}
        categories = {category.id: category for category in self.categories.by_slug.values()}
        populated = []
        for post in posts:
            author = authors[post.author_id]
            populated.append(
                PopulatedPost(
                    post=post,
                    author=AuthorRef(id=author.id, uid=author.uid),
                    categories=tuple(
                        CategoryRef(id=category_id, slug=categories[category_id].slug)
                        for category_id in self.links.get(post.id, [])
                    ),
                ),
            )
        return populated


@pytest.fixture
def authors() -> list[AuthorDB]:
    return [
        AuthorDB(uid="jdoe", name="Jane Doe"),
        AuthorDB(uid="rsmith", name="Rob Smith"),
    ]


@pytest.fixture
def categories() -> list[CategoryDB]:
    return [
        CategoryDB(slug="python", name="Python"),
        CategoryDB(slug="golang", name="Go"),
        CategoryDB(slug="databases", name="Databases"),
    ]


@pytest.fixture
def author_store(authors: list[AuthorDB]) -> InMemoryAuthorStore:
    return InMemoryAuthorStore(authors)


@pytest.fixture
def category_store(categories: list[CategoryDB]) -> InMemoryCategoryStore:
    return InMemoryCategoryStore(categories)


@pytest.fixture
def post_store(
    author_store: InMemoryAuthorStore,
    category_store: InMemoryCategoryStore,
) -> InMemoryPostStore:
    return InMemoryPostStore(author_store, category_store)


@pytest.fixture
def service(
    post_store: InMemoryPostStore,
    author_store: InMemoryAuthorStore,
    category_store: InMemoryCategoryStore,
) -> PostService:
    """Post pipeline over the in-memory stores."""
    return PostService(post_store, author_store, category_store)
