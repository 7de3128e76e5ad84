"""
Facet metadata computed by scanning the active catalog.

Facets always describe the whole active catalog, not the subset matched by
the current request's filters.
"""
from dataclasses import dataclass, field
from functools import reduce
from typing import Dict, Iterable, List, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field

from .categories import classify_category
from .weights import parse_weight
from ..models.product import ProductDocument


class CategoryFacet(BaseModel):
    name: str = Field(..., description="Display category")
    subcategories: List[str] = Field(default_factory=list, description="Weight labels seen in the category")


class FacetSummary(BaseModel):
    """Navigable filter space of the active catalog."""
    model_config = ConfigDict(populate_by_name=True)

    categories: List[CategoryFacet] = Field(default_factory=list)
    min_price: float = Field(0, alias="minPrice")
    max_price: float = Field(0, alias="maxPrice")
    min_stock: Union[int, float] = Field(0, alias="minStock")
    max_stock: Union[int, float] = Field(0, alias="maxStock")
    min_weight: float = Field(0, alias="minWeight")
    max_weight: float = Field(0, alias="maxWeight")
    purity: List[str] = Field(default_factory=list)
    brands: List[str] = Field(default_factory=list)
    manufacturers: List[str] = Field(default_factory=list)
    placements: List[str] = Field(default_factory=list)


@dataclass
class _FacetAccumulator:
    # Minimums stay unset until a product is seen; maximums start at 0
    categories: Dict[str, Dict[str, None]] = field(default_factory=dict)
    min_price: Optional[float] = None
    max_price: float = 0
    min_stock: Optional[Union[int, float]] = None
    max_stock: Union[int, float] = 0
    min_weight: Optional[float] = None
    max_weight: float = 0
    purity: Set[str] = field(default_factory=set)
    brands: Set[str] = field(default_factory=set)
    manufacturers: Set[str] = field(default_factory=set)
    placements: Set[str] = field(default_factory=set)

    def summary(self) -> FacetSummary:
        return FacetSummary(
            categories=[
                CategoryFacet(name=name, subcategories=list(weights))
                for name, weights in self.categories.items()
            ],
            min_price=self.min_price or 0,
            max_price=self.max_price,
            min_stock=self.min_stock or 0,
            max_stock=self.max_stock,
            min_weight=self.min_weight or 0,
            max_weight=self.max_weight,
            purity=sorted(self.purity),
            brands=sorted(self.brands),
            manufacturers=sorted(self.manufacturers),
            placements=sorted(self.placements),
        )


def _lower(current: Optional[float], value: float) -> float:
    return value if current is None else min(current, value)


def _accumulate(acc: _FacetAccumulator, product: ProductDocument) -> _FacetAccumulator:
    weights = acc.categories.setdefault(classify_category(product.name), {})
    if product.weight:
        weights.setdefault(product.weight, None)

    acc.min_price = _lower(acc.min_price, product.price)
    acc.max_price = max(acc.max_price, product.price)
    acc.min_stock = _lower(acc.min_stock, product.stock)
    acc.max_stock = max(acc.max_stock, product.stock)

    weight = parse_weight(product.weight)
    acc.min_weight = _lower(acc.min_weight, weight)
    acc.max_weight = max(acc.max_weight, weight)

    if product.purity:
        acc.purity.add(product.purity)
    if product.brand:
        acc.brands.add(product.brand)
    if product.manufacturer:
        acc.manufacturers.add(product.manufacturer)
    if product.placement:
        acc.placements.add(product.placement)
    return acc


def aggregate_facets(products: Iterable[ProductDocument]) -> FacetSummary:
    """
    Fold the active products into a ``FacetSummary``.

    With no products every bound is 0 and every list is empty.
    """
    return reduce(_accumulate, products, _FacetAccumulator()).summary()
