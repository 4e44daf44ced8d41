from dataclasses import dataclass
from catalog_crawler.db.models.base import BaseModel

@dataclass(kw_only=True)
class ImageData(BaseModel):
    """Gallery image of a product"""
    product_id: int
    url: str
