# tests/services/test_shaper.py
"""Tests for app/services/shaper.py module."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from app.models import PostDB
from app.schemas.refs import AuthorRef, CategoryRef, PopulatedPost
from app.services.shaper import (
    author_url,
    category_url,
    post_url,
    shape_post,
    shape_post_summary,
    snapshot_post,
)
from app.utils.helpers import format_datetime


@pytest.fixture
def populated() -> PopulatedPost:
    author = AuthorRef(id=uuid4(), uid="jdoe")
    post = PostDB(
        pid="abc123",
        title="Getting started with asyncio",
        description="A gentle introduction",
        content="Coroutines let a single thread juggle many sockets.",
        tags=["coroutines", "single", "thread", "juggle", "sockets"],
        author_id=author.id,
        version=3,
        created_at=datetime(2025, 1, 1, 10, 0, tzinfo=UTC),
    )
    return PopulatedPost(
        post=post,
        author=author,
        categories=(
            CategoryRef(id=uuid4(), slug="python"),
            CategoryRef(id=uuid4(), slug="concurrency"),
        ),
    )


class TestUrls:
    """Tests for the resource link builders."""

    def test_default_prefix(self) -> None:
        assert author_url("jdoe") == "/api/author/jdoe"
        assert category_url("python") == "/api/category/python"
        assert post_url("abc123") == "/api/post/abc123"

    def test_explicit_prefix(self) -> None:
        assert author_url("jdoe", prefix="/v2") == "/v2/author/jdoe"
        assert post_url("abc123", prefix="") == "/post/abc123"


class TestShapePost:
    """Tests for shape_post function."""

    def test_links_replace_references(self, populated: PopulatedPost) -> None:
        """Author and categories become links, in category order."""
        shaped = shape_post(populated)
        assert shaped.author_url == "/api/author/jdoe"
        assert shaped.categories_url == ["/api/category/python", "/api/category/concurrency"]

    def test_internal_fields_dropped(self, populated: PopulatedPost) -> None:
        """Storage key, author key and version never appear."""
        body = shape_post(populated).model_dump(by_alias=True)
        assert set(body) == {
            "pid",
            "title",
            "description",
            "content",
            "tags",
            "authorURL",
            "categoriesURL",
            "createdAt",
            "updatedAt",
        }

    def test_content_and_tags_kept(self, populated: PopulatedPost) -> None:
        shaped = shape_post(populated)
        assert shaped.content == populated.post.content
        assert shaped.tags == populated.post.tags

    def test_timestamps_formatted(self, populated: PopulatedPost) -> None:
        shaped = shape_post(populated)
        assert shaped.created_at == format_datetime(populated.post.created_at)
        assert shaped.updated_at == "No updates"

    def test_input_not_mutated(self, populated: PopulatedPost) -> None:
        """Shaping leaves the stored post untouched."""
        before = populated.post.model_dump()
        shaped = shape_post(populated)
        shaped.tags.append("extra")
        assert populated.post.model_dump() == before
        assert "extra" not in populated.post.tags

    def test_no_categories(self, populated: PopulatedPost) -> None:
        bare = PopulatedPost(post=populated.post, author=populated.author, categories=())
        assert shape_post(bare).categories_url == []


class TestShapePostSummary:
    """Tests for shape_post_summary function."""

    def test_summary_fields(self, populated: PopulatedPost) -> None:
        """Summaries carry a post link but no content or tags."""
        body = shape_post_summary(populated).model_dump(by_alias=True)
        assert body["postURL"] == "/api/post/abc123"
        assert body["authorURL"] == "/api/author/jdoe"
        assert body["categoriesURL"] == ["/api/category/python", "/api/category/concurrency"]
        assert "content" not in body
        assert "tags" not in body


class TestSnapshotPost:
    """Tests for snapshot_post function."""

    def test_references_stay_internal(self, populated: PopulatedPost) -> None:
        """The snapshot keeps internal keys instead of links."""
        category_ids = [category.id for category in populated.categories]
        snapshot = snapshot_post(populated.post, category_ids)
        assert snapshot.author == populated.post.author_id
        assert snapshot.categories == category_ids
        assert snapshot.tags == populated.post.tags
        assert snapshot.pid == "abc123"
