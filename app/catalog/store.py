"""
Product store collaborators.

The executor only relies on the ``ProductStore`` protocol: a filtered, sorted
page, a count for the same filter, and a scan of every active product.
"""
from datetime import datetime
from numbers import Number
from typing import Any, Dict, Iterable, List, Optional, Protocol

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

from .filters import FilterSpec
from .sorting import SortKeys
from .weights import WEIGHT_NUMERIC_FIELD, parse_weight, weight_numeric_expression
from ..models.product import ProductDocument
from ..utils.serializers import serialize_docs

ACTIVE_ONLY = {"isActive": True}


class StoreError(Exception):
    """Raised when the product store cannot serve a read."""


class StoreUnavailableError(StoreError):
    """Raised when there is no usable database connection."""


class ProductStore(Protocol):
    async def find_page(
        self, spec: FilterSpec, sort: SortKeys, skip: int, limit: int
    ) -> List[ProductDocument]:
        ...

    async def count(self, spec: FilterSpec) -> int:
        ...

    async def scan_active(self) -> List[ProductDocument]:
        ...


def _to_products(docs: List[Dict[str, Any]]) -> List[ProductDocument]:
    return [ProductDocument.model_validate(doc) for doc in serialize_docs(docs)]


class MotorProductStore:
    """Product store backed by a MongoDB collection through Motor."""

    def __init__(self, database: Optional[AsyncIOMotorDatabase], collection_name: str):
        self.database = database
        self.collection_name = collection_name

    @property
    def collection(self) -> AsyncIOMotorCollection:
        if self.database is None:
            raise StoreUnavailableError("Database connection not available")
        return self.database[self.collection_name]

    async def find_page(
        self, spec: FilterSpec, sort: SortKeys, skip: int, limit: int
    ) -> List[ProductDocument]:
        query = spec.to_query()
        if any(field == WEIGHT_NUMERIC_FIELD for field, _ in sort):
            # The numeric weight only exists as a derived field
            pipeline = [
                {"$match": query},
                {"$addFields": {WEIGHT_NUMERIC_FIELD: weight_numeric_expression()}},
                {"$sort": dict(sort)},
                {"$skip": skip},
                {"$limit": limit},
                {"$project": {WEIGHT_NUMERIC_FIELD: 0}},
            ]
            docs = await self.collection.aggregate(pipeline).to_list(length=limit)
        else:
            cursor = self.collection.find(query).sort(sort).skip(skip).limit(limit)
            docs = await cursor.to_list(length=limit)
        return _to_products(docs)

    async def count(self, spec: FilterSpec) -> int:
        return await self.collection.count_documents(spec.to_query())

    async def scan_active(self) -> List[ProductDocument]:
        docs = await self.collection.find(ACTIVE_ONLY).to_list(length=None)
        return _to_products(docs)


# MongoDB's cross-type sort order: missing/null, numbers, strings, documents,
# arrays, booleans, dates
def _type_rank(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        return 5
    if isinstance(value, Number):
        return 1
    if isinstance(value, str):
        return 2
    if isinstance(value, dict):
        return 3
    if isinstance(value, (list, tuple)):
        return 4
    if isinstance(value, datetime):
        return 6
    return 7


def _sort_value(product: ProductDocument, field: str) -> Any:
    if field == WEIGHT_NUMERIC_FIELD:
        return parse_weight(product.weight)
    return product.field_value(field)


def _sort_key(value: Any):
    rank = _type_rank(value)
    if rank in (0, 7):
        return (rank,)
    if rank in (3, 4):
        return (rank, repr(value))
    return (rank, value)


class MemoryProductStore:
    """
    Product store over an in-process list of products.

    Mirrors the MongoDB store's semantics: filtering goes through
    ``FilterSpec.matches`` and equal sort keys keep insertion order.
    """

    def __init__(self, products: Iterable[ProductDocument] = ()):
        self.products: List[ProductDocument] = list(products)

    @classmethod
    def from_documents(cls, docs: Iterable[Dict[str, Any]]) -> "MemoryProductStore":
        return cls(_to_products(list(docs)))

    def _matching(self, spec: FilterSpec) -> List[ProductDocument]:
        return [product for product in self.products if spec.matches(product)]

    async def find_page(
        self, spec: FilterSpec, sort: SortKeys, skip: int, limit: int
    ) -> List[ProductDocument]:
        results = self._matching(spec)
        # Stable sorts applied from the least significant key upwards
        for field, direction in reversed(sort):
            results.sort(key=lambda p: _sort_key(_sort_value(p, field)), reverse=direction < 0)
        return results[skip:skip + limit]

    async def count(self, spec: FilterSpec) -> int:
        return len(self._matching(spec))

    async def scan_active(self) -> List[ProductDocument]:
        return [product for product in self.products if product.is_active]
