"""Durable string key-value storage.

A small local-storage style interface: string keys map to string
values. FileStorage keeps one file per key under a data directory.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from catalog.domain.exceptions import PersistenceWriteFailure

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"[A-Za-z0-9_.-]+")


class KeyValueStorage(ABC):

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the value stored under *key*, or None."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete *key*. Removing a missing key is not an error."""


class FileStorage(KeyValueStorage):

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            # Write beside the target then swap, so readers never see half a blob.
            fd, tmp_name = tempfile.mkstemp(
                dir=self._directory, prefix=f".{key}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceWriteFailure(
                f"Could not write '{key}' to {self._directory}: {exc.strerror or exc}"
            ) from exc
        logger.debug("Wrote %d characters to %s", len(value), path)

    def remove_item(self, key: str) -> None:
        try:
            self._path_for(key).unlink(missing_ok=True)
        except OSError as exc:
            raise PersistenceWriteFailure(f"Could not remove '{key}': {exc}") from exc

    def _path_for(self, key: str) -> Path:
        if not _KEY_RE.fullmatch(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}.json"
