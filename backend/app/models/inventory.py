"""
Inventory record models plus the request/response payloads of the inventory API.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from backend.app.constants import INVENTORY_SCHEMA_VERSION


class InventoryRecord(BaseModel):
    """One player's pet inventory (held counts, equipped slots, favorites)."""
    model_config = ConfigDict(populate_by_name=True)

    schema_version: int = Field(INVENTORY_SCHEMA_VERSION, alias="schemaVersion")
    inventory: dict[str, int] = Field(default_factory=dict, description="Pet name -> held count (>= 1)")
    equipped_pets: list[str] = Field(default_factory=list, alias="equippedPets", description="Equipped pets in slot order")
    favorites: set[str] = Field(default_factory=set, description="Pet names marked favorite")

    @field_serializer("favorites")
    def _serialize_favorites(self, favorites: set[str]) -> list[str]:
        return sorted(favorites)

    def to_wire(self) -> dict:
        """JSON-safe dict in the persisted/wire layout (camelCase keys)."""
        return self.model_dump(by_alias=True, mode="json")


class MutationReason(str, Enum):
    """Why a mutation was rejected. The record is unchanged in every case."""
    NOT_IN_INVENTORY = "not_in_inventory"
    SLOTS_FULL = "slots_full"
    INVALID_SLOT = "invalid_slot"
    UNKNOWN_PET = "unknown_pet"
    INVALID_ACTION = "invalid_action"


class MutationResult(BaseModel):
    """Outcome of an inventory mutation."""
    operation: str = Field(..., description="add_pet, equip_pet, unequip_pet or toggle_favorite")
    applied: bool = Field(..., description="False when the mutation was rejected")
    reason: Optional[MutationReason] = Field(None, description="Rejection reason when applied is False")
    record: InventoryRecord


class EquipActionRequest(BaseModel):
    """Equip remote event: ("equip", pet name) or ("unequip", slot index)."""
    action: str = Field(..., description="equip or unequip")
    target: Union[int, str] = Field(..., description="Pet name for equip, 1-based slot index for unequip")


class PetNameRequest(BaseModel):
    """Request carrying a single pet name (favorite toggle, add pet)."""
    model_config = ConfigDict(populate_by_name=True)

    pet_name: str = Field(..., min_length=1, alias="petName")
