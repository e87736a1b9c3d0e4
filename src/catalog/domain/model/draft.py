"""Draft: the raw, string-typed contents of an open product form.

A Draft mirrors Product's editable fields as text because it holds user
input before validation. ``parse()`` turns it into typed ProductFields
and reports failures as data instead of raising, so every caller handles
the invalid path the same way.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.product import Product, ProductFields
from catalog.domain.model.value_objects import Price, Stock

DRAFT_FIELDS = ("name", "price", "description", "stock")


@dataclass(frozen=True)
class DraftParseResult:
    fields: ProductFields | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.fields is not None and not self.errors

    def raise_for_errors(self) -> ProductFields:
        """Return the parsed fields, or raise ValidationError listing every problem."""
        if not self.ok:
            summary = "; ".join(self.errors.values())
            raise ValidationError(f"Please fix the product form: {summary}", self.errors)
        return self.fields


@dataclass(frozen=True)
class Draft:
    name: str = ""
    price: str = ""
    description: str = ""
    stock: str = ""
    product_id: str | None = None  # None while creating a new product

    @classmethod
    def empty(cls) -> Draft:
        return cls()

    @classmethod
    def from_product(cls, product: Product) -> Draft:
        return cls(
            name=product.name,
            price=product.price.to_text(),
            description=product.description,
            stock=str(product.stock),
            product_id=product.id,
        )

    @property
    def is_new(self) -> bool:
        return self.product_id is None

    def with_field(self, field_name: str, value: str) -> Draft:
        if field_name not in DRAFT_FIELDS:
            raise ValidationError(
                f"Unknown product field {field_name!r}; "
                f"expected one of {', '.join(DRAFT_FIELDS)}"
            )
        if not isinstance(value, str):
            raise ValidationError(f"Value for {field_name!r} must be text")
        return replace(self, **{field_name: value})

    def parse(self) -> DraftParseResult:
        errors: dict[str, str] = {}

        name = self.name.strip()
        if not name:
            errors["name"] = "Product name is required"

        price = stock = None
        try:
            price = Price.of(self.price)
        except ValidationError as exc:
            errors["price"] = str(exc)
        try:
            stock = Stock.of(self.stock)
        except ValidationError as exc:
            errors["stock"] = str(exc)

        if errors:
            return DraftParseResult(errors=errors)

        # Description is free text; any string (including "") is valid.
        return DraftParseResult(
            fields=ProductFields(
                name=name,
                price=price,
                description=self.description,
                stock=stock,
            )
        )

    def to_dict(self) -> dict[str, str | None]:
        return {
            "name": self.name,
            "price": self.price,
            "description": self.description,
            "stock": self.stock,
            "productId": self.product_id,
        }
