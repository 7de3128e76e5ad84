"""
Catalog query orchestration: filter, sort, paginate, and attach facets.
"""
import asyncio
import logging
import math
from typing import List, Optional

from pydantic import BaseModel

from .facets import FacetSummary, aggregate_facets
from .filters import FilterSpecBuilder
from .params import RawParams, get_scalar, parse_positive_int
from .sorting import resolve_sort
from .store import ProductStore
from ..models.product import ProductDocument
from ..schemas.common import PaginationMeta

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20


class CatalogRetrievalError(Exception):
    """Raised when the product store fails while serving a catalog query."""


class PageRequest(BaseModel):
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_params(cls, params: RawParams, default_limit: int = DEFAULT_LIMIT) -> "PageRequest":
        return cls(
            page=parse_positive_int(get_scalar(params, "page"), DEFAULT_PAGE),
            limit=parse_positive_int(get_scalar(params, "limit"), default_limit),
        )


class CatalogPage(BaseModel):
    items: List[ProductDocument]
    pagination: PaginationMeta
    facets: FacetSummary


class CatalogQueryExecutor:
    """
    Runs a catalog query against a product store.

    The page fetch, the count, and the active-catalog scan used for facets are
    independent reads and are issued concurrently. They are not guaranteed to
    observe the same snapshot of the store.
    """

    def __init__(
        self,
        store: ProductStore,
        builder: Optional[FilterSpecBuilder] = None,
        default_limit: int = DEFAULT_LIMIT,
    ):
        self.store = store
        self.builder = builder or FilterSpecBuilder()
        self.default_limit = default_limit

    async def execute(self, params: RawParams) -> CatalogPage:
        """
        Execute a catalog query for raw request parameters.

        Args:
            params: Raw query parameters; values may be strings or lists of strings

        Returns:
            The requested page, pagination metadata and facets for the active catalog

        Raises:
            CatalogRetrievalError: If any store read fails
        """
        spec = self.builder.build(params)
        sort = resolve_sort(get_scalar(params, "sortBy"), get_scalar(params, "sortOrder"))
        page = PageRequest.from_params(params, self.default_limit)

        results = await asyncio.gather(
            self.store.find_page(spec, sort, page.skip, page.limit),
            self.store.count(spec),
            self.store.scan_active(),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, Exception):
                logger.error(f"Failed to fetch products: {result!r}")
                raise CatalogRetrievalError("Failed to fetch products") from result
            if isinstance(result, BaseException):
                raise result

        items, total, active_products = results
        return CatalogPage(
            items=items,
            pagination=PaginationMeta(
                page=page.page,
                limit=page.limit,
                total=total,
                pages=math.ceil(total / page.limit),
            ),
            facets=aggregate_facets(active_products),
        )
