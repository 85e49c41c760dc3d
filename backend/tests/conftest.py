"""Pytest setup: throwaway database path, cache reset, shared catalog/manager fixtures."""
from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

_TMP_ROOT = Path(tempfile.mkdtemp(prefix="pets-tests-"))
os.environ.setdefault("PETS_DB_PATH", str(_TMP_ROOT / "pets.db"))

from backend.app.core.inventory_manager import InventoryManager  # noqa: E402
from backend.app.db.store import MemoryBlobStore  # noqa: E402
from backend.app.models.pet import PetDefinition  # noqa: E402
from shared.cache import clear_all_caches  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_caches():
    clear_all_caches()
    yield
    clear_all_caches()


@pytest.fixture
def catalog() -> dict[str, PetDefinition]:
    return {
        "Cat": PetDefinition(name="Cat", icon="icon://cat", strength=5, rarity="Common"),
        "Dog": PetDefinition(name="Dog", icon="icon://dog", strength=7, rarity="Uncommon"),
        "Fox": PetDefinition(name="Fox", icon="icon://fox", strength=10, rarity="Rare"),
        "Owl": PetDefinition(name="Owl", icon="icon://owl", strength=12, rarity="Epic"),
    }


@pytest.fixture
def memory_store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def manager(memory_store, catalog) -> InventoryManager:
    return InventoryManager(store=memory_store, catalog=catalog)
