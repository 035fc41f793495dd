"""Author repository (read-only: authors are managed elsewhere)."""

from app.models import AuthorDB
from app.repositories.base import BaseRepository


class AuthorRepository(BaseRepository[AuthorDB]):
    """Repository for Author lookups."""

    model = AuthorDB

    async def get_by_uid(self, uid: str) -> AuthorDB | None:
        """
        Get author by public handle.

        Args:
            uid: Author uid

        Returns:
            AuthorDB | None: Author if found, None otherwise
        """
        return await self.get_by_field("uid", uid)
