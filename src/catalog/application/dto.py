"""Snapshot DTOs, the plain containers the session hands to the presentation layer.

The session publishes a SessionSnapshot after every command. Snapshots
are frozen copies, so the presentation layer can hold on to one without
ever touching the live Product entities.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from catalog.domain.model.draft import Draft
from catalog.domain.model.product import Product
from catalog.domain.model.session_state import SessionState


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    price: Decimal
    description: str
    stock: int

    @classmethod
    def from_product(cls, product: Product) -> ProductDTO:
        return cls(
            id=product.id,
            name=product.name,
            price=product.price.amount,
            description=product.description,
            stock=product.stock.value,
        )

    @property
    def display_price(self) -> str:
        return f"${self.price:.2f}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": float(self.price),  # exact: Price only holds double-representable amounts
            "description": self.description,
            "stock": self.stock,
        }


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything the presentation layer needs to render."""

    products: tuple[ProductDTO, ...]
    state: SessionState
    draft: Draft | None
    synced: bool = True  # False until a failed write has been retried successfully

    def find(self, product_id: str) -> ProductDTO | None:
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "products": [p.to_dict() for p in self.products],
            "sessionState": self.state.to_dict(),
            "draft": self.draft.to_dict() if self.draft is not None else None,
        }
