"""
Faceted catalog query engine.
"""
from .categories import CategoryFilter, classify_category
from .facets import CategoryFacet, FacetSummary, aggregate_facets
from .filters import DateRange, FilterSpec, FilterSpecBuilder, NumericRange, StockStatus
from .query import CatalogPage, CatalogQueryExecutor, CatalogRetrievalError, PageRequest
from .sorting import resolve_sort
from .store import (
    MemoryProductStore,
    MotorProductStore,
    ProductStore,
    StoreError,
    StoreUnavailableError,
)

__all__ = [
    "CategoryFilter",
    "classify_category",
    "CategoryFacet",
    "FacetSummary",
    "aggregate_facets",
    "DateRange",
    "FilterSpec",
    "FilterSpecBuilder",
    "NumericRange",
    "StockStatus",
    "CatalogPage",
    "CatalogQueryExecutor",
    "CatalogRetrievalError",
    "PageRequest",
    "resolve_sort",
    "MemoryProductStore",
    "MotorProductStore",
    "ProductStore",
    "StoreError",
    "StoreUnavailableError",
]
