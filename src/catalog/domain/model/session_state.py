"""Edit-session state: Idle, Creating, or Editing a specific product."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EditMode(Enum):
    IDLE = "IDLE"
    CREATING = "CREATING"
    EDITING = "EDITING"


@dataclass(frozen=True)
class SessionState:
    mode: EditMode
    product_id: str | None = None  # set only while EDITING

    def __post_init__(self) -> None:
        if (self.mode is EditMode.EDITING) != (self.product_id is not None):
            raise ValueError("product_id must be set exactly when mode is EDITING")

    @classmethod
    def idle(cls) -> SessionState:
        return cls(EditMode.IDLE)

    @classmethod
    def creating(cls) -> SessionState:
        return cls(EditMode.CREATING)

    @classmethod
    def editing(cls, product_id: str) -> SessionState:
        return cls(EditMode.EDITING, product_id)

    @property
    def is_idle(self) -> bool:
        return self.mode is EditMode.IDLE

    def is_editing(self, product_id: str) -> bool:
        return self.mode is EditMode.EDITING and self.product_id == product_id

    def __str__(self) -> str:
        if self.mode is EditMode.EDITING:
            return f"Editing({self.product_id})"
        return self.mode.value.capitalize()

    def to_dict(self) -> dict[str, str | None]:
        return {"mode": self.mode.value, "productId": self.product_id}
