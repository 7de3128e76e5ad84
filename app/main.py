# main.py
import logging
from datetime import datetime

from fastapi import Depends, FastAPI, HTTPException

from .catalog.params import RawParams
from .catalog.query import CatalogQueryExecutor, CatalogRetrievalError
from .config.database import DatabaseManager, get_database_manager, lifespan
from .config.settings import get_settings
from .schemas.common import ErrorResponse, HealthCheckResponse, RootResponse
from .schemas.product import CatalogListResponse
from .utils.dependencies import get_catalog_executor, get_raw_params

settings = get_settings()

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)


@app.get("/", response_model=RootResponse, tags=["Root"])
async def root():
    """Root endpoint - Always accessible"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health",
        "status": "running",
        "timestamp": datetime.utcnow().isoformat()
    }


@app.get("/health", response_model=HealthCheckResponse, tags=["Health"])
async def health_check(manager: DatabaseManager = Depends(get_database_manager)):
    """Health check endpoint - Always accessible"""
    try:
        if manager.is_connected():
            await manager.get_database().command('ping')
            db_status = "connected"
        else:
            db_status = "disconnected"
    except Exception as e:
        db_status = f"error: {str(e)}"

    return {
        "status": "healthy",
        "database": db_status,
        "timestamp": datetime.utcnow().isoformat(),
        "version": settings.app_version
    }


@app.get(
    "/goldCatalogs",
    response_model=CatalogListResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["Catalog"],
)
async def list_gold_catalog(
    params: RawParams = Depends(get_raw_params),
    executor: CatalogQueryExecutor = Depends(get_catalog_executor),
):
    """
    Search the gold catalog with filters, sorting and pagination

    Accepts page, limit, search, category, minPrice, maxPrice, minStock,
    maxStock, stockStatus, weight, purity, brand, manufacturer, placement,
    dateFrom, dateTo, sortBy and sortOrder. Malformed values are ignored
    rather than rejected. Facets always describe the whole active catalog.
    """
    try:
        return await executor.execute(params)
    except CatalogRetrievalError:
        raise HTTPException(status_code=500, detail="Failed to fetch products")
