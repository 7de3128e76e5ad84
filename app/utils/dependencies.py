"""
FastAPI dependencies for catalog access
"""
from fastapi import Depends, Request
import logging

from ..catalog.params import RawParams, normalize_params
from ..catalog.query import CatalogQueryExecutor
from ..catalog.store import MotorProductStore, ProductStore
from ..config.database import DatabaseManager, get_database_manager
from ..config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def get_product_store(
    manager: DatabaseManager = Depends(get_database_manager),
    settings: Settings = Depends(get_settings),
) -> ProductStore:
    """
    Dependency to get the catalog product store

    The store is returned even without a database connection; its reads then
    fail and the request reports a retrieval error.
    """
    if not manager.is_connected():
        logger.warning("Catalog requested without a database connection")
    return MotorProductStore(manager.database, settings.catalog_collection)


def get_catalog_executor(
    store: ProductStore = Depends(get_product_store),
    settings: Settings = Depends(get_settings),
) -> CatalogQueryExecutor:
    """Dependency to get a catalog query executor bound to the product store"""
    return CatalogQueryExecutor(store, default_limit=settings.default_page_size)


def get_raw_params(request: Request) -> RawParams:
    """
    Raw query parameters with repeated keys collected into lists

    Values are passed on untyped; the catalog query parses them leniently.
    """
    return normalize_params(request.query_params.multi_items())
