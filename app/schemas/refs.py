"""Internal references produced by relationship resolution and dereference."""

from dataclasses import dataclass
from uuid import UUID

from app.models import PostDB


@dataclass(frozen=True, slots=True)
class AuthorRef:
    """Resolved author: internal key plus public handle."""

    id: UUID
    uid: str


@dataclass(frozen=True, slots=True)
class CategoryRef:
    """Resolved category: internal key plus public slug."""

    id: UUID
    slug: str


@dataclass(frozen=True, slots=True)
class PopulatedPost:
    """A stored post with its author and categories dereferenced."""

    post: PostDB
    author: AuthorRef
    categories: tuple[CategoryRef, ...]
