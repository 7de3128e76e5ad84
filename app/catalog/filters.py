"""
Translation of raw catalog query parameters into a typed filter specification.

``FilterSpecBuilder`` is lenient: a malformed value for one
dimension simply leaves that dimension unconstrained. The resulting
``FilterSpec`` renders both as a MongoDB filter document and as an in-process
predicate, and the two renderings are kept equivalent.
"""
import re
from datetime import datetime, time
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .categories import CategoryFilter
from .params import RawParams, get_scalar, get_values, parse_calendar_date, parse_number
from ..models.product import ProductDocument

SEARCH_FIELDS = ("name", "description", "brand", "manufacturer")

END_OF_DAY = time(23, 59, 59, 999000)


class StockStatus(str, Enum):
    IN_STOCK = "in-stock"
    OUT_OF_STOCK = "out-of-stock"
    LOW_STOCK = "low-stock"
    HIGH_STOCK = "high-stock"

    def to_query(self) -> Any:
        if self is StockStatus.IN_STOCK:
            return {"$gt": 0}
        if self is StockStatus.OUT_OF_STOCK:
            return 0
        if self is StockStatus.LOW_STOCK:
            return {"$gt": 0, "$lte": 10}
        return {"$gt": 50}

    def accepts(self, stock: float) -> bool:
        if self is StockStatus.IN_STOCK:
            return stock > 0
        if self is StockStatus.OUT_OF_STOCK:
            return stock == 0
        if self is StockStatus.LOW_STOCK:
            return 0 < stock <= 10
        return stock > 50


class NumericRange(BaseModel):
    """Inclusive range; either bound may be open."""
    model_config = ConfigDict(frozen=True)

    min: Optional[float] = None
    max: Optional[float] = None

    def to_query(self) -> Dict[str, float]:
        condition = {}
        if self.min is not None:
            condition["$gte"] = self.min
        if self.max is not None:
            condition["$lte"] = self.max
        return condition

    def contains(self, value: Optional[float]) -> bool:
        if value is None:
            return False
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True


class DateRange(BaseModel):
    """Inclusive creation-time window in naive UTC."""
    model_config = ConfigDict(frozen=True)

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def to_query(self) -> Dict[str, datetime]:
        condition = {}
        if self.start is not None:
            condition["$gte"] = self.start
        if self.end is not None:
            condition["$lte"] = self.end
        return condition

    def contains(self, value: Optional[datetime]) -> bool:
        if value is None:
            return False
        if value.tzinfo is not None:
            value = value.replace(tzinfo=None) - value.utcoffset()
        if self.start is not None and value < self.start:
            return False
        if self.end is not None and value > self.end:
            return False
        return True


class FilterSpec(BaseModel):
    """
    Normalized catalog filter.

    Dimensions combine with AND; the values of a multi-valued dimension
    combine with OR. An empty value tuple leaves the dimension unconstrained.
    Only active products are ever matched.
    """
    model_config = ConfigDict(frozen=True)

    search: Optional[str] = None
    category: Optional[CategoryFilter] = None
    price: Optional[NumericRange] = None
    stock: Optional[NumericRange] = None
    stock_status: Optional[StockStatus] = None
    weight: Tuple[str, ...] = ()
    purity: Tuple[str, ...] = ()
    brand: Tuple[str, ...] = ()
    manufacturer: Tuple[str, ...] = ()
    placement: Tuple[str, ...] = ()
    created_at: Optional[DateRange] = None

    def _memberships(self):
        return (
            ("weight", self.weight),
            ("purity", self.purity),
            ("brand", self.brand),
            ("manufacturer", self.manufacturer),
            ("placement", self.placement),
        )

    def to_query(self) -> Dict[str, Any]:
        """MongoDB filter document for this specification."""
        query: Dict[str, Any] = {"isActive": True}

        if self.search:
            pattern = re.escape(self.search)
            query["$or"] = [
                {field: {"$regex": pattern, "$options": "i"}} for field in SEARCH_FIELDS
            ]

        if self.category is not None:
            query["name"] = {"$regex": self.category.keyword, "$options": "i"}

        if self.price is not None:
            query["price"] = self.price.to_query()

        if self.stock_status is not None:
            query["stock"] = self.stock_status.to_query()
        elif self.stock is not None:
            query["stock"] = self.stock.to_query()

        for field, values in self._memberships():
            if values:
                query[field] = {"$in": list(values)}

        if self.created_at is not None:
            query["createdAt"] = self.created_at.to_query()

        return query

    def matches(self, product: ProductDocument) -> bool:
        """Evaluate the specification against a single product in process."""
        if not product.is_active:
            return False

        if self.search:
            needle = self.search.lower()
            haystacks = (product.name, product.description, product.brand, product.manufacturer)
            if not any(text and needle in text.lower() for text in haystacks):
                return False

        if self.category is not None and self.category.keyword not in (product.name or "").lower():
            return False

        if self.price is not None and not self.price.contains(product.price):
            return False

        if self.stock_status is not None:
            if not self.stock_status.accepts(product.stock):
                return False
        elif self.stock is not None and not self.stock.contains(product.stock):
            return False

        for field, values in self._memberships():
            if values and getattr(product, field) not in values:
                return False

        if self.created_at is not None and not self.created_at.contains(product.created_at):
            return False

        return True


class FilterSpecBuilder:
    """Builds a ``FilterSpec`` from raw query parameters without ever failing."""

    def build(self, params: RawParams) -> FilterSpec:
        stock_status = self._stock_status(params)
        return FilterSpec(
            search=self._search(params),
            category=self._category(params),
            price=self._range(params, "minPrice", "maxPrice"),
            # A recognized stock status replaces any explicit stock bounds
            stock=None if stock_status is not None else self._range(params, "minStock", "maxStock"),
            stock_status=stock_status,
            weight=tuple(get_values(params, "weight")),
            purity=tuple(get_values(params, "purity")),
            brand=tuple(get_values(params, "brand")),
            manufacturer=tuple(get_values(params, "manufacturer")),
            placement=tuple(get_values(params, "placement")),
            created_at=self._date_range(params),
        )

    @staticmethod
    def _search(params: RawParams) -> Optional[str]:
        search = (get_scalar(params, "search") or "").strip()
        return search or None

    @staticmethod
    def _category(params: RawParams) -> Optional[CategoryFilter]:
        category = (get_scalar(params, "category") or "").lower()
        try:
            return CategoryFilter(category)
        except ValueError:
            # "all", absent and unrecognized values leave the category open
            return None

    @staticmethod
    def _range(params: RawParams, min_key: str, max_key: str) -> Optional[NumericRange]:
        low = parse_number(get_scalar(params, min_key))
        high = parse_number(get_scalar(params, max_key))
        if low is None and high is None:
            return None
        return NumericRange(min=low, max=high)

    @staticmethod
    def _stock_status(params: RawParams) -> Optional[StockStatus]:
        try:
            return StockStatus(get_scalar(params, "stockStatus"))
        except ValueError:
            return None

    @staticmethod
    def _date_range(params: RawParams) -> Optional[DateRange]:
        date_from = parse_calendar_date(get_scalar(params, "dateFrom"))
        date_to = parse_calendar_date(get_scalar(params, "dateTo"))
        if date_from is None and date_to is None:
            return None
        return DateRange(
            start=datetime.combine(date_from, time.min) if date_from else None,
            end=datetime.combine(date_to, END_OF_DAY) if date_to else None,
        )
