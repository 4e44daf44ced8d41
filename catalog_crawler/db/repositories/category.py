from typing import Optional
from supabase import AsyncClient
from catalog_crawler.db.repositories.base import BaseRepository
from catalog_crawler.db.models import CategoryData

class CategoryRepository(BaseRepository[CategoryData]):
    """Repository for the category tree"""

    def __init__(self, supabase: AsyncClient):
        super().__init__(supabase, "categories", CategoryData)

    async def get_by_name(self, name: str) -> Optional[CategoryData]:
        """Get category by its unique name"""
        return await self.find_one(name=name)
