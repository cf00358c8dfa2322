"""Service layer for the JSON-backed product inventory."""

from .errors import (
    CodeCollisionError,
    DuplicateProductError,
    IncompleteProductError,
    PersistenceError,
    ProductNotFoundError,
    ProductStoreError,
    ProductValidationError,
)
from .product_store import ProductStore

__all__ = [
    "CodeCollisionError",
    "DuplicateProductError",
    "IncompleteProductError",
    "PersistenceError",
    "ProductNotFoundError",
    "ProductStore",
    "ProductStoreError",
    "ProductValidationError",
]
