"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from catalog.domain.exceptions import ValidationError

# Integer notation only: optional sign followed by digits.
_INTEGER_RE = re.compile(r"[+-]?\d+")


@dataclass(frozen=True)
class Price:
    """Non-negative unit price.

    Uses Decimal so that what the user typed ("9.99") is what gets stored,
    without floating-point drift.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Price amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Price must be a finite number, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(f"Price cannot be negative, got {self.amount}")
        # Prices are stored as JSON numbers (doubles); only accept amounts
        # that come back unchanged.
        as_float = float(self.amount)
        if not math.isfinite(as_float) or Decimal(repr(as_float)) != self.amount:
            raise ValidationError(
                f"Price {self.amount} is out of range or has too many digits"
            )

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    def to_text(self) -> str:
        """Plain decimal text, as shown in an edit form."""
        return str(self.amount)

    def to_number(self) -> float:
        """JSON-number form; exact, since construction rejects anything a double can't hold."""
        return float(self.amount)

    @staticmethod
    def of(amount: str | int | Decimal) -> Price:
        """Parse user input or a stored number into a Price."""
        if isinstance(amount, str):
            amount = amount.strip()
            if not amount:
                raise ValidationError("Price is required")
        try:
            return Price(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid price: {amount!r}") from exc


@dataclass(frozen=True)
class Stock:
    """Number of units on hand. Zero is allowed, negatives are not."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Stock must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 0:
            raise ValidationError(f"Stock cannot be negative, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)

    @staticmethod
    def of(value: str | int) -> Stock:
        if isinstance(value, str):
            text = value.strip()
            if not text:
                raise ValidationError("Stock is required")
            if not _INTEGER_RE.fullmatch(text):
                raise ValidationError(f"Invalid stock: {value!r} is not a whole number")
            return Stock(int(text))
        return Stock(value)
