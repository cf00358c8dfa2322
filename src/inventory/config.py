"""Configuration models for the inventory store and its HTTP facade."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


DEFAULT_STORE_PATH = Path("productos.json")
DEFAULT_PORT = 8080


@dataclass
class StoreConfig:
    """Location of the JSON file holding the product list."""

    path: Path = DEFAULT_STORE_PATH

    @classmethod
    def from_env(cls) -> "StoreConfig":
        configured = os.environ.get("PRODUCT_STORE_PATH")
        if configured:
            return cls(path=Path(configured))
        return cls()


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        return cls(
            host=os.environ.get("PRODUCT_API_HOST", "0.0.0.0"),
            port=int(os.environ.get("PRODUCT_API_PORT", DEFAULT_PORT)),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
