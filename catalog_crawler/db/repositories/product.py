from typing import Optional
from supabase import AsyncClient
from catalog_crawler.db.repositories.base import BaseRepository
from catalog_crawler.db.models import ProductData

class ProductRepository(BaseRepository[ProductData]):
    """Repository for product operations"""

    def __init__(self, supabase: AsyncClient):
        super().__init__(supabase, "products", ProductData)

    async def get_by_external_id(self, external_id: str) -> Optional[ProductData]:
        """Get product by the source site's identifier"""
        result = await self.supabase.table(self.table_name).select("*").eq("external_id", external_id).execute()
        return ProductData.from_dict(result.data[0]) if result.data else None

    async def update_commerce_fields(self, product_id: int, product: ProductData) -> ProductData:
        """Refresh price, original price and availability of an existing product"""
        return await self.update_fields(product_id, product.commerce_fields())
