from typing import List
from supabase import AsyncClient
from catalog_crawler.db.repositories.base import BaseRepository
from catalog_crawler.db.models import ImageData

class ImageRepository(BaseRepository[ImageData]):
    """Repository for product gallery images"""

    def __init__(self, supabase: AsyncClient):
        super().__init__(supabase, "images", ImageData)

    async def get_by_product(self, product_id: int) -> List[ImageData]:
        return await self.find_by(product_id=product_id)
