"""Category repository (read-only: categories are managed elsewhere)."""

from app.models import CategoryDB
from app.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[CategoryDB]):
    """Repository for Category lookups."""

    model = CategoryDB

    async def get_by_slug(self, slug: str) -> CategoryDB | None:
        """
        Get category by slug.

        Args:
            slug: Category slug

        Returns:
            CategoryDB | None: Category if found, None otherwise
        """
        return await self.get_by_field("slug", slug)
