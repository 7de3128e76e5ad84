"""
Product API schemas for catalog responses.
These models define the structure of data sent from the API.
"""
from typing import List
from pydantic import BaseModel, Field

from ..catalog.facets import FacetSummary
from ..models.product import ProductDocument
from .common import PaginationMeta


class CatalogListResponse(BaseModel):
    """Response schema for a catalog page with facets."""
    items: List[ProductDocument] = Field(..., description="Products on the requested page")
    pagination: PaginationMeta = Field(..., description="Pagination metadata")
    facets: FacetSummary = Field(..., description="Filter options across the whole active catalog")
