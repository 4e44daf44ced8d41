from catalog_crawler.db.repositories.base import BaseRepository
from catalog_crawler.db.repositories.category import CategoryRepository
from catalog_crawler.db.repositories.brand import BrandRepository
from catalog_crawler.db.repositories.product import ProductRepository
from catalog_crawler.db.repositories.image import ImageRepository
from catalog_crawler.db.repositories.attribute import (
    AttributeGroupRepository,
    AttributeRepository,
    ProductAttributeRepository,
)

__all__ = [
    'BaseRepository',
    'CategoryRepository',
    'BrandRepository',
    'ProductRepository',
    'ImageRepository',
    'AttributeGroupRepository',
    'AttributeRepository',
    'ProductAttributeRepository',
]
