"""
Models package for database document structures.
These models represent how data is stored in MongoDB.
"""
from .product import ProductDocument

__all__ = [
    "ProductDocument",
]
