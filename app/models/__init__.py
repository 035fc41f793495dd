"""Database models for the application."""

from app.models.author import AuthorDB
from app.models.category import CategoryDB
from app.models.post import PostCategoryLink, PostDB, generate_pid

__all__ = ["AuthorDB", "CategoryDB", "PostCategoryLink", "PostDB", "generate_pid"]
