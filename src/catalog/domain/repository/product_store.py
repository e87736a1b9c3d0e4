"""Abstract persistence port for the product catalog.

Defined in the domain layer so the domain never depends on
infrastructure. The catalog is stored as one blob: ``load`` reads the
whole collection and ``save`` overwrites it, there is no per-product
access.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.product import Product


class ProductStore(ABC):

    @abstractmethod
    def load(self) -> list[Product]:
        """Return the stored catalog, or an empty list if there is none.

        Unreadable data must not raise; implementations fall back to an
        empty catalog and issue a CorruptStateWarning.
        """

    @abstractmethod
    def save(self, products: list[Product]) -> None:
        """Replace the stored catalog with *products*.

        Raises PersistenceWriteFailure if the write is rejected.
        """
