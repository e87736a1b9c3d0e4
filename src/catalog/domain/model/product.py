"""Product entity.

Products are the only persisted records in the catalog. Their id is
minted once by the session and never changes; every other field may be
replaced by an update.
"""

from __future__ import annotations

from dataclasses import dataclass

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.value_objects import Price, Stock


@dataclass(frozen=True)
class ProductFields:
    """Typed, validated field values for a product, without an id."""

    name: str
    price: Price
    description: str
    stock: Stock


@dataclass
class Product:
    """A product in the catalog.

    Kept as a mutable dataclass because in-place updates (same id, same
    position in the catalog) are a legitimate mutation on the entity.
    """

    id: str
    name: str
    price: Price
    description: str
    stock: Stock

    @classmethod
    def create(cls, product_id: str, fields: ProductFields) -> Product:
        if not product_id:
            raise ValidationError("Product id is required")
        return cls(
            id=product_id,
            name=fields.name,
            price=fields.price,
            description=fields.description,
            stock=fields.stock,
        )

    def apply(self, fields: ProductFields) -> None:
        """Replace every field except the id."""
        self.name = fields.name
        self.price = fields.price
        self.description = fields.description
        self.stock = fields.stock
