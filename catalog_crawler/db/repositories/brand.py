from supabase import AsyncClient
from catalog_crawler.db.repositories.base import BaseRepository
from catalog_crawler.db.models import BrandData

class BrandRepository(BaseRepository[BrandData]):
    """Repository for brands"""

    def __init__(self, supabase: AsyncClient):
        super().__init__(supabase, "brands", BrandData)

    async def get_or_create_by_name(self, name: str) -> BrandData:
        return await self.get_or_create(BrandData.from_name(name), keys=("name",))
