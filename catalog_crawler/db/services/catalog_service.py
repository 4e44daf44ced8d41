import logging
from typing import Optional

from supabase import AsyncClient

from catalog_crawler.db.models import BrandData, CategoryData, ImageData, ProductAttributeData, ProductData
from catalog_crawler.db.repositories import (
    AttributeGroupRepository,
    AttributeRepository,
    BrandRepository,
    CategoryRepository,
    ImageRepository,
    ProductAttributeRepository,
    ProductRepository,
)
from catalog_crawler.db.services.category_hierarchy import CategoryHierarchyResolver
from catalog_crawler.items import ProductItem

logger = logging.getLogger(__name__)

class CatalogService:
    """Merges scraped products into the catalog tables.

    Brands, categories, attribute groups and attributes are looked up by
    their unique keys and created on first sighting. Products are matched by
    ``external_id``: a known product only gets its price, original price and
    availability refreshed, a new one is created together with its images
    and attribute values.
    """

    def __init__(self, supabase: AsyncClient):
        self.category_repo = CategoryRepository(supabase)
        self.brand_repo = BrandRepository(supabase)
        self.product_repo = ProductRepository(supabase)
        self.image_repo = ImageRepository(supabase)
        self.attribute_group_repo = AttributeGroupRepository(supabase)
        self.attribute_repo = AttributeRepository(supabase)
        self.product_attribute_repo = ProductAttributeRepository(supabase)
        self.hierarchy = CategoryHierarchyResolver(self.category_repo)
        self.products_created = 0
        self.products_updated = 0

    async def reconcile_product(self, item: ProductItem) -> Optional[ProductData]:
        """Create or refresh the product described by ``item``.

        Returns the stored product, or None when the item carries no category.
        """
        brand = await self._find_or_create_brand(item.get('brand'))

        category_name = item.get('category')
        if not category_name:
            logger.warning(f"Skipping product without category: {item.get('url')}")
            return None
        category = await self._find_or_create_category(category_name)

        scraped = ProductData.from_scraped_item(
            item,
            category_id=category.id,
            brand_id=brand.id if brand else None,
        )

        existing = None
        if scraped.external_id:
            existing = await self.product_repo.get_by_external_id(scraped.external_id)
        else:
            logger.warning(f"Product has no external id and cannot be matched on later runs: {item.get('url')}")

        if existing:
            product = await self.product_repo.update_commerce_fields(existing.id, scraped)
            self.products_updated += 1
            logger.info(f"Updated product: {product.name}")
            return product

        product = await self.product_repo.create(scraped)
        await self._create_images(product, item.get('images') or [])
        await self._create_attributes(product, item.get('attributes') or [])
        self.products_created += 1
        logger.info(f"Added new product: {product.name}")
        return product

    async def save_category(self, category: CategoryData) -> CategoryData:
        """Write a category after recomputing its derived columns.

        New categories are inserted through the unique name constraint;
        existing ones have their name, parent and derived columns rewritten.
        """
        category = await self.hierarchy.resolve(category)
        if category.id is None:
            return await self.category_repo.get_or_create(category, keys=("name",))

        return await self.category_repo.update_fields(category.id, {
            'name': category.name,
            'parent_id': category.parent_id,
            'slug': category.slug,
            'full_slug': category.full_slug,
            'level': category.level,
        })

    async def _find_or_create_brand(self, name: Optional[str]) -> Optional[BrandData]:
        if not name:
            return None
        return await self.brand_repo.get_or_create_by_name(name)

    async def _find_or_create_category(self, name: str) -> CategoryData:
        category = await self.category_repo.get_by_name(name)
        if category:
            return category
        return await self.save_category(CategoryData(name=name))

    async def _create_images(self, product: ProductData, urls: list) -> None:
        for url in urls:
            await self.image_repo.create(ImageData(product_id=product.id, url=url))

    async def _create_attributes(self, product: ProductData, attributes: list) -> None:
        for row in attributes:
            group = await self.attribute_group_repo.get_or_create_by_name(row['group'])
            attribute = await self.attribute_repo.get_or_create_in_group(row['name'], group.id)
            await self.product_attribute_repo.create(ProductAttributeData(
                product_id=product.id,
                attribute_id=attribute.id,
                value=row['value'],
            ))
