"""Pet catalog: static pet definitions loaded from pets.yaml, in file order."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from backend.app.constants import DEFAULT_PET_CATALOG
from backend.app.models.pet import PetDefinition
from shared.cache import clear_cache, get_cache_value

logger = logging.getLogger(__name__)

_CATALOG_CACHE_KEY = "pet_catalog_cache"


def _parse_catalog(entries: list[Any]) -> dict[str, PetDefinition]:
    catalog: dict[str, PetDefinition] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        try:
            pet = PetDefinition.model_validate(entry)
        except ValidationError as e:
            # Log validation errors but don't crash
            logger.warning("Failed to validate pet %s: %s", entry.get("name"), e)
            continue
        if pet.name in catalog:
            logger.warning("Duplicate pet %s in catalog; keeping first", pet.name)
            continue
        catalog[pet.name] = pet
    return catalog


def load_pet_catalog(path: str | Path | None = None) -> dict[str, PetDefinition]:
    """Load pet definitions keyed by name.

    Load order:
    1. explicit path argument (not cached)
    2. configured CATALOG_PATH (cached)
    3. built-in catalog when the file is missing or empty
    """
    if path is not None:
        return _read_catalog_file(Path(path))

    return get_cache_value(_CATALOG_CACHE_KEY, _read_configured_catalog)


def _read_configured_catalog() -> dict[str, PetDefinition]:
    from backend.app.config import CATALOG_PATH

    return _read_catalog_file(CATALOG_PATH)


def _read_catalog_file(path: Path) -> dict[str, PetDefinition]:
    if not path.exists():
        logger.warning("Pet catalog missing at %s; using built-in catalog", path)
        return _parse_catalog(list(DEFAULT_PET_CATALOG))
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    entries = data.get("pets", []) if isinstance(data, dict) else []
    catalog = _parse_catalog(entries)
    if not catalog:
        logger.warning("Pet catalog at %s has no valid pets; using built-in catalog", path)
        return _parse_catalog(list(DEFAULT_PET_CATALOG))
    return catalog


def starter_pets(catalog: dict[str, PetDefinition], count: int) -> list[str]:
    """First ``count`` pet names in catalog order."""
    return list(catalog)[: max(0, count)]


def clear_pet_catalog_cache() -> None:
    """Clear cached catalog (useful for tests)."""
    clear_cache(_CATALOG_CACHE_KEY)
