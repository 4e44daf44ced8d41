from dataclasses import dataclass
from catalog_crawler.db.models.base import BaseModel

@dataclass(kw_only=True)
class AttributeGroupData(BaseModel):
    """Named cluster of specification rows, e.g. "Display" or "Power" """
    name: str

@dataclass(kw_only=True)
class AttributeData(BaseModel):
    """Attribute name, unique within its group"""
    name: str
    attribute_group_id: int

@dataclass(kw_only=True)
class ProductAttributeData(BaseModel):
    """Per-product value of an attribute"""
    product_id: int
    attribute_id: int
    value: str
