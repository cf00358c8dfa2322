"""FastAPI application that serves the product inventory read-only."""
from __future__ import annotations

import logging
import re
from dataclasses import asdict
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from inventory.config import ServerConfig, StoreConfig
from inventory.data.records import ProductRecord
from inventory.service import (
    PersistenceError,
    ProductNotFoundError,
    ProductStore,
    ProductValidationError,
)

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")

server_config = ServerConfig.from_env()
logging.basicConfig(level=server_config.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Inventory Products API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
store = ProductStore(StoreConfig.from_env().path)


def _parse_int(raw: Optional[str]) -> Optional[int]:
    """Return the leading integer of ``raw``, or None when it has none."""

    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    if not match:
        return None
    return int(match.group(1))


def _serialize_product(record: ProductRecord) -> Dict[str, object]:
    return asdict(record)


@app.exception_handler(ProductNotFoundError)
async def _not_found(request: Request, exc: ProductNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(ProductValidationError)
async def _invalid(request: Request, exc: ProductValidationError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(PersistenceError)
async def _storage_failure(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("Storage failure while serving %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "product storage is unavailable"},
    )


@app.get("/products")
def list_products(limit: Optional[str] = None) -> List[Dict[str, object]]:
    parsed = _parse_int(limit)
    if parsed is None:
        products = store.read_all()
    else:
        products = store.first(parsed)
    return [_serialize_product(product) for product in products]


@app.get("/products/{product_id}")
def get_product(product_id: str) -> Dict[str, object]:
    parsed = _parse_int(product_id)
    if parsed is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with id {product_id} does not exist",
        )
    return _serialize_product(store.read_by_id(parsed))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=server_config.host, port=server_config.port)
