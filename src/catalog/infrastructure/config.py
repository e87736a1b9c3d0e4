"""Runtime configuration, read from the environment (and a .env file if present)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from catalog.infrastructure.persistence.local_storage_product_store import STORAGE_KEY

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class CatalogConfig:
    data_dir: Path = DEFAULT_DATA_DIR
    storage_key: str = STORAGE_KEY
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> CatalogConfig:
        load_dotenv()
        data_dir = os.getenv("CATALOG_DATA_DIR")
        return cls(
            data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
            storage_key=os.getenv("CATALOG_STORAGE_KEY") or STORAGE_KEY,
            log_level=(os.getenv("CATALOG_LOG_LEVEL") or "WARNING").upper(),
        )
