"""
Schemas package for API response validation.
These models define the structure of data sent from the API endpoints.
"""

# Common schemas
from .common import (
    HealthCheckResponse,
    RootResponse,
    ErrorResponse,
    PaginationMeta,
)

__all__ = [
    "HealthCheckResponse",
    "RootResponse",
    "ErrorResponse",
    "PaginationMeta",
]
