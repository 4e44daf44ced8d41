"""Derivation of a category's slug, level and full slug from its parent chain."""

from slugify import slugify

from catalog_crawler.db.models import CategoryData
from catalog_crawler.db.repositories import CategoryRepository


class CategoryHierarchyResolver:
    """Computes the derived columns of a category before it is written.

    The parent is read from the store at call time, so a category reflects
    its ancestry as of its own last write. Descendants are not rewritten
    when an ancestor changes.
    """

    def __init__(self, category_repo: CategoryRepository):
        self.category_repo = category_repo

    async def resolve(self, category: CategoryData) -> CategoryData:
        if not category.slug:
            category.slug = slugify(category.name)

        if category.parent_id is None:
            category.level = 1
            category.full_slug = category.slug
            return category

        if category.id is not None and category.parent_id == category.id:
            raise ValueError(f"Category {category.id} cannot be its own parent")

        parent = await self.category_repo.get_by_id(category.parent_id)
        if not parent:
            raise ValueError(f"Parent category with id {category.parent_id} not found")
        if category.id is not None:
            await self._check_not_descendant(category.id, parent)

        category.level = (parent.level or 1) + 1
        category.full_slug = f"{parent.full_slug}/{category.slug}"
        return category

    async def _check_not_descendant(self, category_id: int, parent: CategoryData) -> None:
        """Raise ValueError if ``category_id`` appears among ``parent`` and its ancestors."""
        seen = set()
        ancestor = parent
        while ancestor is not None and ancestor.id not in seen:
            if ancestor.id == category_id:
                raise ValueError(f"Category {category_id} cannot be moved under its descendant {parent.id}")
            seen.add(ancestor.id)
            if ancestor.parent_id is None:
                return
            ancestor = await self.category_repo.get_by_id(ancestor.parent_id)
