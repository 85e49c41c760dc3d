"""App config: data/database paths, catalog location, inventory tuning, env overrides.

Env overrides: PETS_DATA_ROOT, PETS_DB_PATH, PETS_CATALOG_PATH, PETS_STARTER_COUNT,
PETS_STRICT_CATALOG.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

from backend.app.constants import STARTER_PET_COUNT as _DEFAULT_STARTER_COUNT
from shared.config import PET_CATALOG_PATH, STRICT_CATALOG, _env_int

logger = logging.getLogger(__name__)

# Data root directory (parent of static/ and the SQLite file)
DATA_ROOT = Path(os.environ.get("PETS_DATA_ROOT", "./data"))

DEFAULT_DB_PATH = os.environ.get("PETS_DB_PATH", str(DATA_ROOT / "pets.db"))
INVENTORY_TABLE_NAME = "player_inventories"

CATALOG_PATH = Path(PET_CATALOG_PATH)

STARTER_PET_COUNT = max(0, _env_int("PETS_STARTER_COUNT", _DEFAULT_STARTER_COUNT))

STRICT_PET_CATALOG = STRICT_CATALOG


def _log_resolved_config() -> None:
    """Log resolved inventory config at startup (no secrets)."""
    lines = [
        "Inventory config:",
        f"  data_root={DATA_ROOT}",
        f"  db_path={DEFAULT_DB_PATH}",
        f"  catalog={CATALOG_PATH}",
        f"  starter_pets={STARTER_PET_COUNT}",
        f"  strict_catalog={STRICT_PET_CATALOG}",
    ]
    logger.info("\n".join(lines))


_log_resolved_config()
