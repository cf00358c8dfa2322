"""JSON file backed store for inventory product records."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict
from pathlib import Path
from threading import RLock
from typing import List, Mapping

from ..data.records import ProductRecord, missing_fields
from .errors import (
    CodeCollisionError,
    DuplicateProductError,
    IncompleteProductError,
    PersistenceError,
    ProductNotFoundError,
)

logger = logging.getLogger(__name__)


class ProductStore:
    """Product catalog kept as a single JSON array on disk.

    Every operation reloads the whole file first, so the file is the only
    source of truth and nothing is cached between calls. Mutating operations
    rewrite the entire file.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.products: List[ProductRecord] = []
        self._lock = RLock()

    def load(self) -> List[ProductRecord]:
        """Replace the in-memory sequence with the file contents.

        A missing file is an empty store. Anything else that prevents reading
        the file raises :class:`PersistenceError` and leaves ``products`` as it
        was.
        """

        with self._lock:
            return self._load()

    def _load(self) -> List[ProductRecord]:
        if not self.path.exists():
            logger.info("Product file %s does not exist yet, starting empty", self.path)
            self.products = []
            return self.products

        try:
            with self.path.open(encoding="utf-8") as handle:
                raw = json.load(handle)
        except (OSError, ValueError) as exc:
            logger.error("Could not read product file %s: %s", self.path, exc)
            raise PersistenceError(f"Could not read product file {self.path}: {exc}") from exc

        if not isinstance(raw, list):
            logger.error("Product file %s does not hold a JSON array", self.path)
            raise PersistenceError(f"Product file {self.path} does not hold a JSON array")
        try:
            self.products = [ProductRecord.from_dict(row) for row in raw]
        except (AttributeError, TypeError) as exc:
            logger.error("Product file %s holds malformed records: %s", self.path, exc)
            raise PersistenceError(f"Product file {self.path} holds malformed records") from exc
        logger.debug("Loaded %d products from %s", len(self.products), self.path)
        return self.products

    def persist(self) -> None:
        """Write the full sequence, swapping it into place atomically."""

        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with self._lock:
            try:
                payload = json.dumps(
                    [asdict(record) for record in self.products],
                    ensure_ascii=False,
                    separators=(",", ":"),
                )
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with tmp_path.open("w", encoding="utf-8") as handle:
                    handle.write(payload)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_path, self.path)
            except (OSError, TypeError, ValueError) as exc:
                logger.error("Could not write product file %s: %s", self.path, exc)
                self._discard(tmp_path)
                raise PersistenceError(f"Could not write product file {self.path}: {exc}") from exc

    def _discard(self, tmp_path: Path) -> None:
        try:
            tmp_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Could not remove temporary file %s: %s", tmp_path, exc)

    def read_all(self) -> List[ProductRecord]:
        with self._lock:
            return list(self._load())

    def first(self, limit: int) -> List[ProductRecord]:
        """Return the first ``limit`` products, or all of them when out of range."""

        products = self.read_all()
        if limit <= 0 or limit > len(products):
            return products
        return products[:limit]

    def read_by_id(self, product_id: int) -> ProductRecord:
        for product in self.read_all():
            if product.id == product_id:
                return product
        raise ProductNotFoundError(product_id)

    def next_id(self) -> int:
        return max((product.id for product in self.products), default=0) + 1

    def create(self, candidate: Mapping[str, object]) -> ProductRecord:
        """Append a new product and assign it the next free id.

        Candidates are checked in order: same code and title as existing
        products, then a code collision, then missing fields.
        """

        with self._lock:
            self.load()
            code = candidate.get("code")
            title = candidate.get("title")
            code_taken = any(product.code == code for product in self.products)

            if code_taken and any(product.title == title for product in self.products):
                logger.warning('Product "%s" already exists, not adding it', title)
                raise DuplicateProductError(title, code)
            if code_taken:
                logger.warning('Code "%s" already exists, rejecting product "%s"', code, title)
                raise CodeCollisionError(code, title)
            missing = missing_fields(candidate)
            if missing:
                logger.warning('Product "%s" is missing fields: %s', title, ", ".join(missing))
                raise IncompleteProductError(missing, title)

            record = ProductRecord.from_payload(self.next_id(), candidate)
            self.products.append(record)
            try:
                self.persist()
            except PersistenceError:
                self.products.pop()
                raise
            logger.info("Saved product %d to %s", record.id, self.path)
            return record

    def update(self, product_id: int, replacement: Mapping[str, object]) -> ProductRecord:
        """Replace every field of a product except its id."""

        with self._lock:
            index = self._index_of(product_id)
            missing = missing_fields(replacement)
            if missing:
                logger.warning("Update of product %d is missing fields: %s", product_id, ", ".join(missing))
                raise IncompleteProductError(missing, replacement.get("title"))

            previous = self.products[index]
            record = ProductRecord.from_payload(product_id, replacement)
            self.products[index] = record
            try:
                self.persist()
            except PersistenceError:
                self.products[index] = previous
                raise
            logger.info("Updated product %d in %s", product_id, self.path)
            return record

    def delete(self, product_id: int) -> ProductRecord:
        with self._lock:
            index = self._index_of(product_id)
            removed = self.products.pop(index)
            try:
                self.persist()
            except PersistenceError:
                self.products.insert(index, removed)
                raise
            logger.info("Deleted product %d from %s", product_id, self.path)
            return removed

    def _index_of(self, product_id: int) -> int:
        self.load()
        for index, product in enumerate(self.products):
            if product.id == product_id:
                return index
        logger.warning("Product %d does not exist", product_id)
        raise ProductNotFoundError(product_id)
