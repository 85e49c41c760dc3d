"""Inventory panel view model: equipped slot row, pet grid with count badges, tooltips.

Works on the wire snapshot (``equippedPets``/``inventory``/``favorites``) and
catalog entries as returned by the API, so it can run on the client side.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from backend.app.constants import MAX_EQUIPPED_PETS, SLOT_INDEX_BASE


@dataclass
class PetTile:
    pet_name: str
    icon: str = ""
    count: int = 1
    favorite: bool = False
    tooltip: list[str] = field(default_factory=list)

    @property
    def badge(self) -> str | None:
        # count label only when more than one copy is held
        return str(self.count) if self.count > 1 else None


@dataclass
class SlotTile:
    slot_index: int
    pet: PetTile | None = None

    @property
    def empty(self) -> bool:
        return self.pet is None


@dataclass
class InventoryView:
    slots: list[SlotTile]
    grid: list[PetTile]


def _catalog_index(catalog: Any) -> dict[str, Mapping[str, Any]]:
    if isinstance(catalog, Mapping):
        return {name: _as_mapping(entry) for name, entry in catalog.items()}
    return {str(entry.get("name")): entry for entry in catalog or [] if isinstance(entry, Mapping)}


def _as_mapping(entry: Any) -> Mapping[str, Any]:
    if isinstance(entry, Mapping):
        return entry
    return entry.model_dump()


def tooltip_lines(pet_name: str, info: Mapping[str, Any] | None) -> list[str]:
    """Name, strength and rarity lines; empty for pets missing from the catalog."""
    if not info:
        return []
    name = info.get("display_name") or info.get("displayName") or info.get("name") or pet_name
    return [
        str(name),
        f"Strength: {info.get('strength')}",
        f"Rarity: {info.get('rarity')}",
    ]


def _tile(pet_name: str, info: Mapping[str, Any] | None, count: int, favorites: set[str]) -> PetTile:
    return PetTile(
        pet_name=pet_name,
        icon=str((info or {}).get("icon") or ""),
        count=count,
        favorite=pet_name in favorites,
        tooltip=tooltip_lines(pet_name, info),
    )


def build_inventory_view(record: Mapping[str, Any], catalog: Any) -> InventoryView:
    """Build the panel: always MAX_EQUIPPED_PETS slots, then held pets sorted by name."""
    pets = _catalog_index(catalog)
    favorites = set(record.get("favorites") or [])
    equipped = list(record.get("equippedPets") or [])

    slots: list[SlotTile] = []
    for position in range(MAX_EQUIPPED_PETS):
        slot = SlotTile(slot_index=position + SLOT_INDEX_BASE)
        if position < len(equipped):
            name = equipped[position]
            slot.pet = _tile(name, pets.get(name), 1, favorites)
        slots.append(slot)

    inventory = record.get("inventory") or {}
    grid = [
        _tile(name, pets.get(name), int(count), favorites)
        for name, count in sorted(inventory.items())
    ]
    return InventoryView(slots=slots, grid=grid)


def render_text(view: InventoryView) -> str:
    """Plain-text rendering used by the CLI."""
    lines = ["Equipped:"]
    for slot in view.slots:
        if slot.pet is None:
            lines.append(f"  [{slot.slot_index}] (empty)")
        else:
            star = " *" if slot.pet.favorite else ""
            lines.append(f"  [{slot.slot_index}] {slot.pet.pet_name}{star}")
    lines.append("Inventory:")
    if not view.grid:
        lines.append("  (none)")
    for tile in view.grid:
        star = " *" if tile.favorite else ""
        badge = f" x{tile.badge}" if tile.badge else ""
        detail = f"  ({', '.join(tile.tooltip[1:])})" if tile.tooltip else ""
        lines.append(f"  {tile.pet_name}{badge}{star}{detail}")
    return "\n".join(lines)
