from typing import List
from supabase import AsyncClient
from catalog_crawler.db.repositories.base import BaseRepository
from catalog_crawler.db.models import AttributeGroupData, AttributeData, ProductAttributeData

class AttributeGroupRepository(BaseRepository[AttributeGroupData]):
    """Repository for attribute groups"""

    def __init__(self, supabase: AsyncClient):
        super().__init__(supabase, "attribute_groups", AttributeGroupData)

    async def get_or_create_by_name(self, name: str) -> AttributeGroupData:
        return await self.get_or_create(AttributeGroupData(name=name), keys=("name",))


class AttributeRepository(BaseRepository[AttributeData]):
    """Repository for attributes, unique per (name, attribute_group_id)"""

    def __init__(self, supabase: AsyncClient):
        super().__init__(supabase, "attributes", AttributeData)

    async def get_or_create_in_group(self, name: str, attribute_group_id: int) -> AttributeData:
        return await self.get_or_create(
            AttributeData(name=name, attribute_group_id=attribute_group_id),
            keys=("name", "attribute_group_id"),
        )


class ProductAttributeRepository(BaseRepository[ProductAttributeData]):
    """Repository for the product/attribute association rows"""

    def __init__(self, supabase: AsyncClient):
        super().__init__(supabase, "product_attributes", ProductAttributeData)

    async def get_by_product(self, product_id: int) -> List[ProductAttributeData]:
        return await self.find_by(product_id=product_id)
