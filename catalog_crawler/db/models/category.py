from dataclasses import dataclass
from typing import Optional
from catalog_crawler.db.models.base import BaseModel

@dataclass(kw_only=True)
class CategoryData(BaseModel):
    """Data model for categories.

    ``slug``, ``full_slug`` and ``level`` are derived from ``name`` and the
    parent chain by ``CategoryHierarchyResolver`` before every write.
    """
    name: str
    parent_id: Optional[int] = None
    slug: Optional[str] = None
    full_slug: Optional[str] = None
    level: Optional[int] = None
    external_id: Optional[str] = None

    def get_path_slugs(self) -> list[str]:
        """Get the full slug as a list of slugs from the root"""
        return self.full_slug.split('/') if self.full_slug else []

    def is_root(self) -> bool:
        """Check if category is root level"""
        return self.parent_id is None

    def is_child_of(self, potential_parent_full_slug: str) -> bool:
        """Check if category sits below the given full slug"""
        if not self.full_slug or not potential_parent_full_slug:
            return False
        return self.full_slug.startswith(f"{potential_parent_full_slug}/")
