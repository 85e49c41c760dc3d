"""Shared configuration constants used by the backend, the client and the CLI."""
from __future__ import annotations

import os
from pathlib import Path


def _env_flag(name: str, default: bool = False) -> bool:
    """Read boolean env flag."""
    val = os.environ.get(name, "").strip().lower()
    if not val:
        return default
    return val in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    """Read integer env value, falling back to default on empty or garbage."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Project root: resolve relative to this file's location
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Static pet catalog (YAML). Override: PETS_CATALOG_PATH
PET_CATALOG_PATH = os.environ.get(
    "PETS_CATALOG_PATH", str(_PROJECT_ROOT / "data" / "static" / "pets.yaml")
)

# Base URL the client and CLI talk to
API_BASE_URL = os.environ.get("PETS_API_URL", "http://localhost:8000").strip()

# Unknown pet names are rejected by AddPet when enabled
STRICT_CATALOG = _env_flag("PETS_STRICT_CATALOG", default=False)
