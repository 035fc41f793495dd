"""Category database model using SQLModel."""

from typing import cast
from uuid import UUID, uuid4

from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class CategoryDB(SQLModel, table=True):
    """Category database model."""

    __tablename__ = cast("declared_attr[str]", "categories")

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Category ID",
    )
    slug: str = Field(
        sa_column=Column(String(100), unique=True, nullable=False, index=True),
        description="URL-friendly slug (unique)",
    )
    name: str | None = Field(
        default=None,
        sa_column=Column(String(100)),
        description="Category name",
    )
    description: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Category description",
    )
