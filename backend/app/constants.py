"""Centralized inventory constants shared across the app."""
from __future__ import annotations

# Equipped pet slots
MAX_EQUIPPED_PETS = 5
SLOT_INDEX_BASE = 1  # slot indices exposed to callers start at 1

# Fresh records start with the first N catalog pets, one copy each
STARTER_PET_COUNT = 3

# Persisted record layout. 1 = flat list inventory, 2 = count map.
INVENTORY_SCHEMA_VERSION = 2

# Equip remote event actions
EQUIP_ACTION = "equip"
UNEQUIP_ACTION = "unequip"

# Built-in catalog used when the YAML catalog is missing
DEFAULT_PET_CATALOG: list[dict[str, object]] = [
    {"name": "Cat", "icon": "rbxassetid://1234", "strength": 5, "rarity": "Common"},
    {"name": "Dog", "icon": "rbxassetid://5678", "strength": 7, "rarity": "Uncommon"},
    {"name": "Fox", "icon": "rbxassetid://91011", "strength": 10, "rarity": "Rare"},
]
