"""
Post schemas for the Blog Posts API.

Request bodies accept author and category handles (`uid`, `slug`); responses
carry resource links derived from them instead of embedded objects.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.configs.settings import (
    MAX_CATEGORIES,
    MAX_CONTENT_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_TITLE_LENGTH,
)


def reject_blank_slugs(slugs: list[str]) -> list[str]:
    if any(not slug.strip() for slug in slugs):
        mssg = "Category slugs must not be blank"
        raise ValueError(mssg)
    return slugs


class PostCreate(BaseModel):
    """Post creation model (request body)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = Field(
        ...,
        min_length=1,
        max_length=MAX_TITLE_LENGTH,
        description="Post title",
        examples=["Getting started with asyncio"],
    )
    description: str = Field(
        default="",
        max_length=MAX_DESCRIPTION_LENGTH,
        description="Short post description",
    )
    content: str | None = Field(
        default=None,
        max_length=MAX_CONTENT_LENGTH,
        description="Post content; tags are extracted from it",
        examples=["Coroutines let a single thread juggle many sockets."],
    )
    author: str = Field(
        ...,
        min_length=1,
        description="Author uid",
        examples=["jdoe"],
    )
    categories: list[str] = Field(
        default_factory=list,
        max_length=MAX_CATEGORIES,
        description="Category slugs, in display order",
        examples=[["python", "concurrency"]],
    )

    @field_validator("categories", mode="after")
    @classmethod
    def validate_category_slugs(cls, v: list[str]) -> list[str]:
        """Reject blank category slugs."""
        return reject_blank_slugs(v)


class PostUpdate(BaseModel):
    """Post update model (all fields optional, `tags` is never accepted)."""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "title": "Getting started with asyncio, revised",
                "content": "Event loops schedule coroutines cooperatively.",
                "categories": ["python"],
            },
        },
    )

    title: str | None = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    content: str | None = Field(default=None, min_length=1, max_length=MAX_CONTENT_LENGTH)
    categories: list[str] | None = Field(default=None, max_length=MAX_CATEGORIES)

    @field_validator("categories", mode="after")
    @classmethod
    def validate_category_slugs(cls, v: list[str] | None) -> list[str] | None:
        """Reject blank category slugs."""
        return v if v is None else reject_blank_slugs(v)


class PostResponse(BaseModel):
    """Full post response with author and category links."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    pid: str
    title: str
    description: str
    content: str
    tags: list[str]
    author_url: str = Field(alias="authorURL")
    categories_url: list[str] = Field(alias="categoriesURL")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")


class PostSummaryResponse(BaseModel):
    """Post list item response (no content or tags)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    pid: str
    title: str
    description: str
    post_url: str = Field(alias="postURL")
    author_url: str = Field(alias="authorURL")
    categories_url: list[str] = Field(alias="categoriesURL")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")


class PostSnapshot(BaseModel):
    """Stored state of a post as it was removed (references not dereferenced)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    pid: str
    title: str
    description: str
    content: str
    tags: list[str]
    author: UUID
    categories: list[UUID]
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")
