"""Resolution of public author/category handles into internal references."""

from collections.abc import Sequence

from app.errors.database import NotFoundError
from app.repositories.protocols import AuthorStore, CategoryStore
from app.schemas.refs import AuthorRef, CategoryRef


class RelationshipResolver:
    """
    Turns `uid` and `slug` values from a request into stored references.

    Lookups run one at a time: an `AsyncSession` does not allow concurrent
    statements, and sequential lookups make the first missing slug the one
    reported.
    """

    def __init__(self, authors: AuthorStore, categories: CategoryStore) -> None:
        self.authors = authors
        self.categories = categories

    async def resolve_author(self, uid: str) -> AuthorRef:
        """
        Resolve an author handle.

        Args:
            uid: Author uid

        Returns:
            AuthorRef: Internal reference

        Raises:
            NotFoundError: If no author has `uid`
        """
        author = await self.authors.get_by_uid(uid)
        if author is None:
            raise NotFoundError(detail=f"Author '{uid}' not found")
        return AuthorRef(id=author.id, uid=author.uid)

    async def resolve_categories(self, slugs: Sequence[str]) -> list[CategoryRef]:
        """
        Resolve category slugs, preserving their order.

        Args:
            slugs: Category slugs

        Returns:
            list[CategoryRef]: One reference per slug, same order

        Raises:
            NotFoundError: Naming the first slug with no category
        """
        refs = []
        for slug in slugs:
            category = await self.categories.get_by_slug(slug)
            if category is None:
                raise NotFoundError(detail=f"Category '{slug}' not found")
            refs.append(CategoryRef(id=category.id, slug=category.slug))
        return refs
