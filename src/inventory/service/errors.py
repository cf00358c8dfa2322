"""Error types raised by the product store."""
from __future__ import annotations

from typing import Iterable, Tuple


class ProductStoreError(Exception):
    """Base class for every failure reported by :class:`ProductStore`."""


class ProductNotFoundError(ProductStoreError, LookupError):
    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product with id {product_id} does not exist")
        self.product_id = product_id


class ProductValidationError(ProductStoreError, ValueError):
    """A candidate record was rejected before anything was written."""


class DuplicateProductError(ProductValidationError):
    def __init__(self, title: object, code: object) -> None:
        super().__init__(f'Product "{title}" with code "{code}" already exists')
        self.title = title
        self.code = code


class CodeCollisionError(ProductValidationError):
    def __init__(self, code: object, title: object) -> None:
        super().__init__(f'Code "{code}" is already in use, choose another one for "{title}"')
        self.code = code
        self.title = title


class IncompleteProductError(ProductValidationError):
    def __init__(self, missing: Iterable[str], title: object = None) -> None:
        self.missing: Tuple[str, ...] = tuple(missing)
        label = f' "{title}"' if title else ""
        super().__init__(f"Product{label} is missing required fields: {', '.join(self.missing)}")
        self.title = title


class PersistenceError(ProductStoreError):
    """The backing file could not be read, parsed or written."""
