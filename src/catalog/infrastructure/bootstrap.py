"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from catalog.application.product_session import ProductSession
from catalog.infrastructure.config import CatalogConfig
from catalog.infrastructure.persistence.key_value_storage import FileStorage
from catalog.infrastructure.persistence.local_storage_product_store import (
    LocalStorageProductStore,
)


def product_store(config: CatalogConfig | None = None) -> LocalStorageProductStore:
    config = config or CatalogConfig.from_env()
    return LocalStorageProductStore(FileStorage(config.data_dir), key=config.storage_key)


def product_session(config: CatalogConfig | None = None) -> ProductSession:
    return ProductSession(product_store(config))
