from catalog_crawler.db.models.base import BaseModel
from catalog_crawler.db.models.category import CategoryData
from catalog_crawler.db.models.brand import BrandData
from catalog_crawler.db.models.product import ProductData
from catalog_crawler.db.models.image import ImageData
from catalog_crawler.db.models.attribute import AttributeGroupData, AttributeData, ProductAttributeData

__all__ = [
    'BaseModel',
    'CategoryData',
    'BrandData',
    'ProductData',
    'ImageData',
    'AttributeGroupData',
    'AttributeData',
    'ProductAttributeData',
]
