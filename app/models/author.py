"""Author database model using SQLModel."""

from typing import cast
from uuid import UUID, uuid4

from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class AuthorDB(SQLModel, table=True):
    """
    Author database model.

    Authors are managed outside the posts API; posts only reference them.
    """

    __tablename__ = cast("declared_attr[str]", "authors")

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Author ID",
    )
    uid: str = Field(
        sa_column=Column(String(50), unique=True, nullable=False, index=True),
        description="Public author handle (unique)",
    )
    name: str | None = Field(
        default=None,
        sa_column=Column(String(100)),
        description="Display name",
    )
    bio: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Short profile text",
    )
