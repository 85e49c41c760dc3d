"""Application models (inventory records, mutation results, pet definitions)."""
from .inventory import (
    EquipActionRequest,
    InventoryRecord,
    MutationReason,
    MutationResult,
    PetNameRequest,
)
from .pet import PetDefinition

__all__ = [
    "EquipActionRequest",
    "InventoryRecord",
    "MutationReason",
    "MutationResult",
    "PetNameRequest",
    "PetDefinition",
]
