"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations

from typing import Any


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A required field is missing or cannot be parsed.

    ``errors`` maps each offending draft field to its message.
    """

    def __init__(self, message: str, errors: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.errors = dict(errors or {})


class NotFoundError(DomainException):
    """A command referenced a product id that is not in the catalog."""


class SessionStateError(DomainException):
    """A command was issued in an edit-session state that does not accept it."""


class PersistenceWriteFailure(DomainException):
    """Storage rejected a write (e.g. disk full, permission denied).

    The in-memory catalog remains the source of truth. ``snapshot`` is
    filled in by the session so callers can keep rendering current state.
    """

    def __init__(self, message: str, snapshot: Any = None) -> None:
        super().__init__(message)
        self.snapshot = snapshot


class CorruptStateWarning(UserWarning):
    """Persisted catalog could not be read; starting from an empty catalog."""
