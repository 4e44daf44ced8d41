# Define here the models for your scraped items
#
# See documentation in:
# https://docs.scrapy.org/en/latest/topics/items.html

from typing import List
from datetime import datetime
import scrapy


class AttributeItem(scrapy.Item):
    """One specification row of a product."""
    group = scrapy.Field()  # Attribute group label, e.g. "Дисплей"
    name = scrapy.Field()
    value = scrapy.Field()


class ProductItem(scrapy.Item):
    url = scrapy.Field()
    category = scrapy.Field()  # Name of the category the product was listed under
    timestamp = scrapy.Field()

    external_id = scrapy.Field()  # None when the page has no offer id
    name = scrapy.Field()
    brand = scrapy.Field()
    raw_price = scrapy.Field()
    price = scrapy.Field()
    raw_original_price = scrapy.Field()
    original_price = scrapy.Field()
    description = scrapy.Field()  # Inner markup of the description tab
    is_available = scrapy.Field()
    images = scrapy.Field()
    attributes = scrapy.Field()  # List of AttributeItem dicts

    @classmethod
    def create_empty(cls, url: str, category: str) -> 'ProductItem':
        """Create a product item with the fallback value of every field."""
        return cls(
            url=url,
            category=category,
            external_id=None,
            name=None,
            brand=None,
            raw_price=None,
            price=None,
            raw_original_price=None,
            original_price=None,
            description='',
            is_available=True,
            images=[],
            attributes=[],
            timestamp=datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
        )

    def add_images(self, images: List[str]):
        """Add image URLs to the item."""
        self['images'] = images
        return self

    def add_attribute(self, attribute: AttributeItem):
        """Append a specification row."""
        if 'attributes' not in self:
            self['attributes'] = []
        self['attributes'].append(dict(attribute))
        return self
