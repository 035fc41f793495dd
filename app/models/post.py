"""Post database models using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import JSON, DateTime, Integer, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String


def generate_pid() -> str:
    """Generate the public identifier of a new post."""
    return uuid4().hex


class PostDB(SQLModel, table=True):
    """
    Post database model.

    `pid` is the identifier exposed over HTTP; `id` and `version` never
    leave the service. `tags` is derived from `content` and is only ever
    written together with it.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    # Primary key
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Post ID",
    )
    pid: str = Field(
        default_factory=generate_pid,
        sa_column=Column(String(32), unique=True, nullable=False, index=True),
        description="Public post identifier (unique)",
    )

    # Foreign key to Author
    author_id: UUID = Field(
        sa_column=Column(
            "author_id",
            ForeignKey("authors.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Author ID (foreign key to authors.id)",
    )

    title: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Post title",
    )
    description: str = Field(
        default="",
        sa_column=Column(String(500), nullable=False),
        description="Short post description",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Post content (free text)",
    )
    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON().with_variant(JSONB, "postgresql"), nullable=False),
        description="Keywords extracted from content",
    )
    version: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Incremented on every edit",
    )

    # Timestamps (timezone-aware)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "pid": "9f1c2b7e5d3a4c6b8e0f1a2b3c4d5e6f",
                "author_id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Getting started with asyncio",
                "description": "A gentle introduction",
                "content": "Coroutines let a single thread juggle many sockets.",
                "tags": ["coroutines", "let", "single", "thread", "juggle", "many", "sockets"],
                "version": 0,
            },
        },
    )


class PostCategoryLink(SQLModel, table=True):
    """Ordered many-to-many link between posts and categories."""

    __tablename__ = cast("declared_attr[str]", "post_categories")

    post_id: UUID = Field(
        sa_column=Column(
            "post_id",
            ForeignKey("posts.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    position: int = Field(
        sa_column=Column(Integer, primary_key=True),
        description="Zero-based position of the category within the post",
    )
    category_id: UUID = Field(
        sa_column=Column(
            "category_id",
            ForeignKey("categories.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
