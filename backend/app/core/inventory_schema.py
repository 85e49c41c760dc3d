"""Versioned decode of stored inventory blobs into canonical InventoryRecords.

Two persisted layouts exist:

* v1 (legacy): ``Inventory`` is a flat list of pet names, duplicates meaning
  several copies, plus a single ``EquippedPet`` and ``Favorites`` as a
  ``{name: true}`` map.
* v2: ``inventory`` is a ``{name: count}`` map, ``equippedPets`` an ordered
  list and ``favorites`` a list of names.

The ``inventory`` field is decoded into an explicit format variant first and
each variant is converted by its own branch, so a new layout means a new
variant rather than another isinstance check buried in normalization.
normalize_record is idempotent.
"""
from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from backend.app.constants import MAX_EQUIPPED_PETS
from backend.app.models.inventory import InventoryRecord

logger = logging.getLogger(__name__)

_MISSING = object()

_INVENTORY_KEYS = ("inventory", "Inventory")
_EQUIPPED_KEYS = ("equippedPets", "equipped_pets", "EquippedPets")
_LEGACY_EQUIPPED_KEYS = ("EquippedPet", "equippedPet")
_FAVORITE_KEYS = ("favorites", "Favorites")


@dataclass(frozen=True)
class LegacyListFormat:
    """v1 inventory: one list entry per held copy."""
    entries: tuple[str, ...] = ()

    def to_counts(self) -> dict[str, int]:
        return dict(Counter(self.entries))


@dataclass(frozen=True)
class CountMapFormat:
    """v2 inventory: pet name -> held count, counts already >= 1."""
    counts: dict[str, int] = field(default_factory=dict)

    def to_counts(self) -> dict[str, int]:
        return dict(self.counts)


@dataclass(frozen=True)
class MissingFormat:
    """No usable inventory field; the starter set is substituted."""


InventoryFormat = Union[LegacyListFormat, CountMapFormat, MissingFormat]


def _coerce_count(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def decode_inventory_field(raw: Any) -> InventoryFormat:
    """Classify a raw ``inventory`` value into one of the known layouts."""
    if isinstance(raw, Mapping):
        counts: dict[str, int] = {}
        for name, value in raw.items():
            count = _coerce_count(value)
            if isinstance(name, str) and name and count is not None and count >= 1:
                counts[name] = count
        return CountMapFormat(counts)
    if isinstance(raw, (list, tuple)):
        entries = tuple(e for e in raw if isinstance(e, str) and e)
        if entries:
            return LegacyListFormat(entries)
    return MissingFormat()


def default_record(starter_pets: Sequence[str]) -> InventoryRecord:
    """Fresh record: one copy of each starter pet, nothing equipped, no favorites."""
    return InventoryRecord(inventory={name: 1 for name in starter_pets})


def _first_present(data: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return _MISSING


def _decode_equipped(data: Mapping[str, Any], inventory: dict[str, int]) -> list[str]:
    raw = _first_present(data, _EQUIPPED_KEYS)
    if raw is _MISSING:
        # v1 kept a single equipped pet that was never removed from the list inventory
        legacy = _first_present(data, _LEGACY_EQUIPPED_KEYS)
        if isinstance(legacy, str) and inventory.get(legacy, 0) >= 1:
            _take_one(inventory, legacy)
            return [legacy]
        return []
    if not isinstance(raw, (list, tuple)):
        return []
    equipped = [e for e in raw if isinstance(e, str) and e]
    if len(equipped) > MAX_EQUIPPED_PETS:
        surplus = equipped[MAX_EQUIPPED_PETS:]
        logger.warning("Returning %d surplus equipped pets to inventory", len(surplus))
        for name in surplus:
            inventory[name] = inventory.get(name, 0) + 1
        equipped = equipped[:MAX_EQUIPPED_PETS]
    return equipped


def _decode_favorites(raw: Any) -> set[str]:
    if isinstance(raw, Mapping):
        return {k for k, v in raw.items() if isinstance(k, str) and k and v}
    if isinstance(raw, (set, frozenset, list, tuple)):
        return {e for e in raw if isinstance(e, str) and e}
    return set()


def _take_one(inventory: dict[str, int], name: str) -> None:
    remaining = inventory.get(name, 0) - 1
    if remaining > 0:
        inventory[name] = remaining
    else:
        inventory.pop(name, None)


def normalize_record(raw: Any, starter_pets: Sequence[str]) -> InventoryRecord:
    """Return a canonical InventoryRecord for any loosely-typed stored value."""
    if isinstance(raw, InventoryRecord):
        data: Mapping[str, Any] = raw.model_dump(by_alias=True)
    elif isinstance(raw, Mapping):
        data = raw
    else:
        data = {}

    fmt = decode_inventory_field(_first_present(data, _INVENTORY_KEYS))
    if isinstance(fmt, MissingFormat):
        inventory = {name: 1 for name in starter_pets}
    else:
        inventory = fmt.to_counts()

    equipped = _decode_equipped(data, inventory)
    favorites = _decode_favorites(_first_present(data, _FAVORITE_KEYS))

    return InventoryRecord(inventory=inventory, equipped_pets=equipped, favorites=favorites)
