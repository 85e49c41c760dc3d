"""Tests for stored-record decoding: legacy list inventories, missing fields, idempotency."""
from __future__ import annotations

import pytest

from backend.app.constants import MAX_EQUIPPED_PETS
from backend.app.core.inventory_schema import (
    CountMapFormat,
    LegacyListFormat,
    MissingFormat,
    decode_inventory_field,
    default_record,
    normalize_record,
)
from backend.app.models.inventory import InventoryRecord

STARTERS = ["Cat", "Dog", "Fox"]


def test_decode_list_is_legacy_format() -> None:
    fmt = decode_inventory_field(["Cat", "Cat", "Dog"])
    assert isinstance(fmt, LegacyListFormat)
    assert fmt.to_counts() == {"Cat": 2, "Dog": 1}


def test_decode_map_drops_bad_counts() -> None:
    fmt = decode_inventory_field({"Cat": 2, "Dog": 0, "Fox": "3", "Owl": "lots", "Bat": True})
    assert isinstance(fmt, CountMapFormat)
    assert fmt.to_counts() == {"Cat": 2, "Fox": 3}


@pytest.mark.parametrize("raw", [None, 7, "Cat", [], (), [1, 2], ["", None]])
def test_decode_wrong_shape_is_missing(raw) -> None:
    assert isinstance(decode_inventory_field(raw), MissingFormat)


@pytest.mark.parametrize("raw", [[], [1, 2]])
def test_list_without_pet_names_gets_starter_set(raw) -> None:
    record = normalize_record({"inventory": raw}, STARTERS)
    assert record.inventory == {"Cat": 1, "Dog": 1, "Fox": 1}



def test_legacy_list_inventory_is_tallied() -> None:
    record = normalize_record({"inventory": ["Cat", "Cat", "Dog"]}, STARTERS)
    assert record.inventory == {"Cat": 2, "Dog": 1}
    assert record.equipped_pets == []
    assert record.favorites == set()


def test_missing_inventory_gets_starter_set() -> None:
    record = normalize_record({"equippedPets": ["Owl"]}, STARTERS)
    assert record.inventory == {"Cat": 1, "Dog": 1, "Fox": 1}
    assert record.equipped_pets == ["Owl"]


def test_non_mapping_raw_is_default_record() -> None:
    assert normalize_record(None, STARTERS) == default_record(STARTERS)
    assert normalize_record("garbage", STARTERS) == default_record(STARTERS)


def test_bad_equipped_and_favorites_are_reset() -> None:
    record = normalize_record(
        {"inventory": {"Cat": 1}, "equippedPets": "Cat", "favorites": 12},
        STARTERS,
    )
    assert record.equipped_pets == []
    assert record.favorites == set()


def test_favorites_map_becomes_set_of_truthy_keys() -> None:
    record = normalize_record({"inventory": {}, "favorites": {"Cat": True, "Dog": False}}, STARTERS)
    assert record.favorites == {"Cat"}


def test_empty_count_map_is_kept_empty() -> None:
    record = normalize_record({"inventory": {}, "equippedPets": ["Cat"]}, STARTERS)
    assert record.inventory == {}
    assert record.equipped_pets == ["Cat"]


def test_original_store_shape_is_migrated() -> None:
    raw = {
        "Inventory": ["Cat", "Dog", "Fox", "Cat"],
        "EquippedPet": "Cat",
        "Favorites": {"Fox": True},
    }
    record = normalize_record(raw, STARTERS)
    # the equipped copy leaves the inventory so it is not counted twice
    assert record.inventory == {"Cat": 1, "Dog": 1, "Fox": 1}
    assert record.equipped_pets == ["Cat"]
    assert record.favorites == {"Fox"}


def test_legacy_equipped_pet_not_held_is_dropped() -> None:
    record = normalize_record({"Inventory": ["Dog"], "EquippedPet": "Cat"}, STARTERS)
    assert record.inventory == {"Dog": 1}
    assert record.equipped_pets == []


def test_surplus_equipped_pets_return_to_inventory() -> None:
    equipped = ["Cat", "Dog", "Fox", "Owl", "Cat", "Dog", "Bat"]
    record = normalize_record({"inventory": {"Cat": 1}, "equippedPets": equipped}, STARTERS)
    assert len(record.equipped_pets) == MAX_EQUIPPED_PETS
    assert record.equipped_pets == equipped[:MAX_EQUIPPED_PETS]
    assert record.inventory == {"Cat": 1, "Dog": 1, "Bat": 1}


@pytest.mark.parametrize(
    "raw",
    [
        None,
        {},
        {"inventory": ["Cat", "Cat", "Dog"]},
        {"Inventory": ["Cat", "Dog"], "EquippedPet": "Dog", "Favorites": {"Cat": True}},
        {"inventory": {"Cat": "2"}, "equippedPets": ["Owl"] * 8, "favorites": ["Cat", 3]},
        {"inventory": 5, "equippedPets": None, "favorites": None},
    ],
)
def test_normalize_is_idempotent(raw) -> None:
    once = normalize_record(raw, STARTERS)
    twice = normalize_record(once, STARTERS)
    assert twice == once
    assert normalize_record(once.to_wire(), STARTERS) == once


def test_normalized_records_hold_invariants() -> None:
    raw = {"inventory": {"Cat": -1, "Dog": 3}, "equippedPets": ["Fox"] * 9, "favorites": {"Dog"}}
    record = normalize_record(raw, STARTERS)
    assert all(count >= 1 for count in record.inventory.values())
    assert len(record.equipped_pets) <= MAX_EQUIPPED_PETS
    assert isinstance(record.favorites, set)


def test_wire_layout_uses_camel_case_and_sorted_favorites() -> None:
    record = InventoryRecord(inventory={"Cat": 1}, equipped_pets=["Dog"], favorites={"Fox", "Cat"})
    assert record.to_wire() == {
        "schemaVersion": 2,
        "inventory": {"Cat": 1},
        "equippedPets": ["Dog"],
        "favorites": ["Cat", "Fox"],
    }
