from dataclasses import dataclass
from typing import Optional

from catalog_crawler.items import ProductItem
from catalog_crawler.db.models.base import BaseModel

@dataclass(kw_only=True)
class ProductData(BaseModel):
    """Data model for products.

    ``external_id`` is the source site's identifier and the only key used
    to match a product across crawls.
    """
    name: str
    category_id: int
    external_id: Optional[str] = None
    brand_id: Optional[int] = None
    description: str = ''
    price: Optional[float] = None
    original_price: Optional[float] = None
    sku: Optional[str] = None
    is_available: bool = True

    @classmethod
    def from_scraped_item(
        cls,
        item: ProductItem,
        category_id: int,
        brand_id: Optional[int] = None
    ) -> 'ProductData':
        """Create ProductData from a scraped ProductItem"""
        return cls(
            external_id=item.get('external_id'),
            name=item['name'],
            description=item.get('description') or '',
            price=item.get('price'),
            original_price=item.get('original_price'),
            is_available=bool(item.get('is_available', True)),
            category_id=category_id,
            brand_id=brand_id,
        )

    def commerce_fields(self) -> dict:
        """Fields refreshed in place when a known product is crawled again"""
        return {
            'price': self.price,
            'original_price': self.original_price,
            'is_available': self.is_available,
        }
