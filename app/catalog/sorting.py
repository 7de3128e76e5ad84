"""
Sort key resolution for catalog queries.
"""
from typing import List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING

from .weights import WEIGHT_NUMERIC_FIELD

SortKeys = List[Tuple[str, int]]

DEFAULT_SORT_FIELD = "createdAt"

SORT_FIELDS = {
    "price": "price",
    "stock": "stock",
    "weight": WEIGHT_NUMERIC_FIELD,
    "name": "name",
}


def resolve_sort(sort_by: Optional[str] = None, sort_order: Optional[str] = None) -> SortKeys:
    """
    Ordered ``(field, direction)`` pairs for a requested sort.

    ``popularity`` sorts by views and always breaks ties by newest first.
    Unknown ``sort_by`` values are used as field names as-is.
    """
    sort_by = sort_by or DEFAULT_SORT_FIELD
    direction = ASCENDING if sort_order == "asc" else DESCENDING

    if sort_by == "popularity":
        return [("views", direction), (DEFAULT_SORT_FIELD, DESCENDING)]
    return [(SORT_FIELDS.get(sort_by, sort_by), direction)]
