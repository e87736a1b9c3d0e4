"""ProductStore that keeps the whole catalog as one JSON blob under a fixed key."""

from __future__ import annotations

import json
import logging
import warnings
from decimal import Decimal
from typing import Any

from catalog.domain.exceptions import CorruptStateWarning, ValidationError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Price, Stock
from catalog.domain.repository.product_store import ProductStore
from catalog.infrastructure.persistence.key_value_storage import KeyValueStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "products"


class LocalStorageProductStore(ProductStore):

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    # --- ProductStore interface -----------------------------------------------

    def load(self) -> list[Product]:
        try:
            raw = self._storage.get_item(self._key)
            if raw is None:
                return []
            return self._deserialize(raw)
        # UnicodeDecodeError from a binary file is a ValueError too.
        except (ValueError, TypeError, KeyError, ValidationError) as exc:
            message = (
                f"Stored catalog under '{self._key}' is unreadable ({exc}); "
                "starting with an empty catalog"
            )
            logger.warning(message)
            warnings.warn(message, CorruptStateWarning, stacklevel=2)
            return []

    def save(self, products: list[Product]) -> None:
        self._storage.set_item(self._key, self._serialize(products))

    # --- Serialization helpers ------------------------------------------------

    def _serialize(self, products: list[Product]) -> str:
        raw = [
            {
                "id": p.id,
                "name": p.name,
                "price": p.price.to_number(),
                "description": p.description,
                "stock": p.stock.value,
            }
            for p in products
        ]
        return json.dumps(raw, indent=2, allow_nan=False) + "\n"

    def _deserialize(self, raw: str) -> list[Product]:
        items = json.loads(raw, parse_float=Decimal)
        if not isinstance(items, list):
            raise TypeError(f"expected a JSON array, got {type(items).__name__}")

        products: list[Product] = []
        seen: set[str] = set()
        for item in items:
            if not isinstance(item, dict):
                raise TypeError(f"expected a JSON object, got {type(item).__name__}")
            product = Product(
                id=_require_str(item, "id"),
                name=_require_str(item, "name"),
                price=Price.of(_require_number(item, "price")),
                description=_optional_str(item, "description"),
                stock=Stock.of(_require_number(item, "stock")),
            )
            if product.id in seen:
                raise ValueError(f"duplicate product id {product.id!r}")
            seen.add(product.id)
            products.append(product)
        return products


def _require_str(item: dict[str, Any], key: str) -> str:
    value = item[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_str(item: dict[str, Any], key: str) -> str:
    value = item.get(key, "")
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _require_number(item: dict[str, Any], key: str) -> int | Decimal:
    value = item[key]
    if isinstance(value, bool) or not isinstance(value, (int, Decimal)):
        raise TypeError(f"'{key}' must be a number, got {type(value).__name__}")
    return value
