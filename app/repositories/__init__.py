"""Repository layer for database operations."""

from app.repositories.author import AuthorRepository
from app.repositories.category import CategoryRepository
from app.repositories.post import PostRepository
from app.repositories.protocols import AuthorStore, CategoryStore, PostStore

__all__ = [
    "AuthorRepository",
    "AuthorStore",
    "CategoryRepository",
    "CategoryStore",
    "PostRepository",
    "PostStore",
]
