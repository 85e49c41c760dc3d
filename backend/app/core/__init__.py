"""Core inventory logic: record normalization, pet catalog and the per-player state manager."""
from .inventory_manager import InventoryManager
from .inventory_schema import decode_inventory_field, default_record, normalize_record
from .pet_catalog import load_pet_catalog, starter_pets

__all__ = [
    "InventoryManager",
    "decode_inventory_field",
    "default_record",
    "normalize_record",
    "load_pet_catalog",
    "starter_pets",
]
