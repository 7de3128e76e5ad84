"""
Product data models for database documents.
These represent the actual structure of documents stored in the catalog collection.
"""
from typing import Any, Optional, Union
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class ProductDocument(BaseModel):
    """
    Catalog product as stored in MongoDB.

    Stored field names are camelCase and are exposed through aliases. Fields
    that are not modelled here (images, SKUs, ...) are kept as extras so that
    they are returned to clients unchanged. Numeric labels such as a purity of
    999.9 are read as strings.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow", coerce_numbers_to_str=True)

    id: Optional[str] = Field(None, alias="_id", description="Product ID")
    name: str = Field("", description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    brand: Optional[str] = Field(None, description="Product brand")
    manufacturer: Optional[str] = Field(None, description="Refinery or mint")
    price: float = Field(0, description="Unit price")
    stock: Union[int, float] = Field(0, description="Units in stock")
    weight: Optional[str] = Field(None, description="Weight label, e.g. '250 g'")
    purity: Optional[str] = Field(None, description="Fineness, e.g. '999.9'")
    placement: Optional[str] = Field(None, description="Storefront placement")
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="Creation timestamp")
    is_active: bool = Field(False, alias="isActive", description="Listed for display and sale")
    views: Union[int, float] = Field(0, description="Product page views")

    def field_value(self, field: str) -> Any:
        """Value of a stored field by its document name (``createdAt``, ``price``, ...)."""
        return self.model_dump(by_alias=True).get(field)
