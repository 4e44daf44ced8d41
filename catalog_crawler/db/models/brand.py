from dataclasses import dataclass
from typing import Optional
from slugify import slugify
from catalog_crawler.db.models.base import BaseModel

@dataclass(kw_only=True)
class BrandData(BaseModel):
    """Data model for brands"""
    name: str
    slug: Optional[str] = None

    @classmethod
    def from_name(cls, name: str) -> 'BrandData':
        return cls(name=name, slug=slugify(name))
