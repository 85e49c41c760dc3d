"""Tests for the inventory panel view model."""
from __future__ import annotations

from backend.app.constants import MAX_EQUIPPED_PETS
from ui.inventory_view import build_inventory_view, render_text, tooltip_lines

CATALOG = [
    {"name": "Cat", "displayName": "Cat", "icon": "icon://cat", "strength": 5, "rarity": "Common"},
    {"name": "Dog", "displayName": "Good Dog", "icon": "icon://dog", "strength": 7, "rarity": "Uncommon"},
]


def test_slots_always_padded_to_capacity() -> None:
    view = build_inventory_view({"inventory": {}, "equippedPets": ["Dog"], "favorites": []}, CATALOG)
    assert len(view.slots) == MAX_EQUIPPED_PETS
    assert [s.slot_index for s in view.slots] == [1, 2, 3, 4, 5]
    assert view.slots[0].pet.pet_name == "Dog"
    assert all(s.empty for s in view.slots[1:])


def test_grid_badges_and_favorites() -> None:
    record = {"inventory": {"Dog": 1, "Cat": 3}, "equippedPets": [], "favorites": ["Dog"]}
    view = build_inventory_view(record, CATALOG)
    assert [t.pet_name for t in view.grid] == ["Cat", "Dog"]
    assert view.grid[0].badge == "3"
    assert view.grid[1].badge is None
    assert view.grid[1].favorite is True
    assert view.grid[0].icon == "icon://cat"


def test_tooltip_lines() -> None:
    assert tooltip_lines("Dog", CATALOG[1]) == ["Good Dog", "Strength: 7", "Rarity: Uncommon"]
    assert tooltip_lines("Dragon", None) == []


def test_unknown_pet_renders_without_details() -> None:
    view = build_inventory_view({"inventory": {"Dragon": 1}, "equippedPets": [], "favorites": []}, CATALOG)
    text = render_text(view)
    assert "Dragon" in text
    assert "(empty)" in text
    assert view.grid[0].tooltip == []
