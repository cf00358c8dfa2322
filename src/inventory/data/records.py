"""Product record model and helpers for the JSON-backed inventory."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Mapping, Tuple, Union


REQUIRED_FIELDS: Tuple[str, ...] = (
    "title",
    "description",
    "price",
    "thumbnail",
    "code",
    "stock",
)


@dataclass
class ProductRecord:
    id: int
    title: str
    description: str
    price: Union[str, float, int]
    thumbnail: str
    code: str
    stock: Union[int, str]

    @classmethod
    def from_dict(cls, row: Mapping[str, object]) -> "ProductRecord":
        known = {item.name for item in fields(cls)}
        return cls(**{key: value for key, value in row.items() if key in known})

    @classmethod
    def from_payload(cls, record_id: int, payload: Mapping[str, object]) -> "ProductRecord":
        """Build a record from a candidate body, ignoring any id it carries."""
        return cls(id=record_id, **{name: payload.get(name) for name in REQUIRED_FIELDS})


def missing_fields(payload: Mapping[str, object]) -> Tuple[str, ...]:
    # Zero, empty strings and None all count as missing.
    return tuple(name for name in REQUIRED_FIELDS if not payload.get(name))

