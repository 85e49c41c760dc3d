"""Server-authoritative pet inventory state.

InventoryManager owns the in-memory record of every active player, the pet
catalog and the blob store. Records are loaded on join, mutated in place by
add/equip/unequip/favorite, and saved and evicted on leave.

Mutations never raise for bad input: a rejected mutation leaves the record
untouched and comes back as a MutationResult with applied=False and a reason.
Store failures are logged and absorbed at the Load/Save boundary.

Every operation runs under one re-entrant lock, so requests for the same
player never interleave even when FastAPI serves them from its threadpool.
"""
from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from backend.app.constants import (
    EQUIP_ACTION,
    MAX_EQUIPPED_PETS,
    SLOT_INDEX_BASE,
    STARTER_PET_COUNT,
    UNEQUIP_ACTION,
)
from backend.app.core.error_handling import log_error_with_context
from backend.app.core.errors import InventoryError
from backend.app.core.inventory_schema import default_record, normalize_record
from backend.app.core.pet_catalog import starter_pets
from backend.app.models.inventory import InventoryRecord, MutationReason, MutationResult
from backend.app.models.pet import PetDefinition

if TYPE_CHECKING:
    from backend.app.db.store import BlobStore

logger = logging.getLogger(__name__)


class InventoryManager:
    """Per-player inventory records for one game server instance."""

    def __init__(
        self,
        store: BlobStore,
        catalog: dict[str, PetDefinition],
        starter_count: int = STARTER_PET_COUNT,
        strict_catalog: bool = False,
    ):
        self.store = store
        self.catalog = catalog
        self.strict_catalog = strict_catalog
        self.starter_pets = starter_pets(catalog, starter_count)
        self._records: dict[str, InventoryRecord] = {}
        # Serializes every read-modify-write on _records; routes run in a threadpool.
        self._lock = threading.RLock()

    # ── Records ───────────────────────────────────────────────────────

    def new_record(self) -> InventoryRecord:
        return default_record(self.starter_pets)

    def normalize(self, raw: Any) -> InventoryRecord:
        return normalize_record(raw, self.starter_pets)

    def get_or_create(self, player_id: str) -> InventoryRecord:
        """Return the cached record for player_id, creating a default one if needed.

        The cached record is re-normalized in place on every call, so partially
        built or externally edited records are repaired before use and callers
        holding the record keep seeing later operations.
        """
        with self._lock:
            record = self._records.get(player_id)
            if record is None:
                return self._install(player_id, self.new_record())
            return self._install(player_id, self.normalize(record))

    def _install(self, player_id: str, fresh: InventoryRecord) -> InventoryRecord:
        """Copy fresh into the cached record for player_id (or cache it if none)."""
        record = self._records.get(player_id)
        if record is None or record is fresh:
            self._records[player_id] = fresh
            return fresh
        record.schema_version = fresh.schema_version
        record.inventory.clear()
        record.inventory.update(fresh.inventory)
        record.equipped_pets[:] = fresh.equipped_pets
        record.favorites.clear()
        record.favorites.update(fresh.favorites)
        return record

    def snapshot(self, player_id: str) -> dict[str, Any]:
        with self._lock:
            return self.get_or_create(player_id).to_wire()

    def active_players(self) -> list[str]:
        with self._lock:
            return sorted(self._records)

    def is_active(self, player_id: str) -> bool:
        return player_id in self._records

    def _result(self, operation: str, record: InventoryRecord, reason: MutationReason | None = None) -> MutationResult:
        applied = reason is None
        if not applied:
            logger.debug("Rejected %s: %s", operation, reason.value)
        return MutationResult(
            operation=operation,
            applied=applied,
            reason=reason,
            record=record.model_copy(deep=True),
        )

    # ── Mutations ─────────────────────────────────────────────────────

    def add_pet(self, player_id: str, pet_name: str) -> MutationResult:
        """Give the player one more copy of pet_name."""
        with self._lock:
            record = self.get_or_create(player_id)
            if self.strict_catalog and pet_name not in self.catalog:
                return self._result("add_pet", record, MutationReason.UNKNOWN_PET)
            record.inventory[pet_name] = record.inventory.get(pet_name, 0) + 1
            return self._result("add_pet", record)

    def equip_pet(self, player_id: str, pet_name: str) -> MutationResult:
        """Move one held copy of pet_name into the next free equipped slot."""
        with self._lock:
            record = self.get_or_create(player_id)
            held = record.inventory.get(pet_name, 0)
            if held < 1:
                return self._result("equip_pet", record, MutationReason.NOT_IN_INVENTORY)
            if len(record.equipped_pets) >= MAX_EQUIPPED_PETS:
                return self._result("equip_pet", record, MutationReason.SLOTS_FULL)
            record.equipped_pets.append(pet_name)
            if held > 1:
                record.inventory[pet_name] = held - 1
            else:
                del record.inventory[pet_name]
            return self._result("equip_pet", record)

    def unequip_pet(self, player_id: str, slot_index: int) -> MutationResult:
        """Return the pet in slot_index (1-based) to the inventory; later slots shift down."""
        with self._lock:
            record = self.get_or_create(player_id)
            if isinstance(slot_index, bool) or not isinstance(slot_index, int):
                return self._result("unequip_pet", record, MutationReason.INVALID_SLOT)
            position = slot_index - SLOT_INDEX_BASE
            if position < 0 or position >= len(record.equipped_pets):
                return self._result("unequip_pet", record, MutationReason.INVALID_SLOT)
            pet_name = record.equipped_pets.pop(position)
            record.inventory[pet_name] = record.inventory.get(pet_name, 0) + 1
            return self._result("unequip_pet", record)

    def toggle_favorite(self, player_id: str, pet_name: str) -> MutationResult:
        with self._lock:
            record = self.get_or_create(player_id)
            if pet_name in record.favorites:
                record.favorites.discard(pet_name)
            else:
                record.favorites.add(pet_name)
            return self._result("toggle_favorite", record)

    def handle_equip_action(self, player_id: str, action: str, target: Any) -> MutationResult:
        """Dispatch the equip remote event: ("equip", pet name) or ("unequip", slot index)."""
        if action == EQUIP_ACTION and isinstance(target, str):
            return self.equip_pet(player_id, target)
        if action == UNEQUIP_ACTION and isinstance(target, int) and not isinstance(target, bool):
            return self.unequip_pet(player_id, target)
        with self._lock:
            return self._result(f"{action}_pet", self.get_or_create(player_id), MutationReason.INVALID_ACTION)

    # ── Persistence / session lifecycle ───────────────────────────────

    def load(self, player_id: str) -> InventoryRecord:
        """Load player_id from the store, falling back to a fresh record on any failure."""
        with self._lock:
            raw: Any = None
            try:
                raw = self.store.get(player_id)
            except InventoryError as e:
                log_error_with_context(
                    error=e,
                    node_name="store",
                    player_id=player_id,
                    operation="load",
                    level=logging.WARNING,
                    exc_info=False,
                )
            except Exception as e:
                log_error_with_context(error=e, node_name="store", player_id=player_id, operation="load")

            if isinstance(raw, dict):
                record = self.normalize(raw)
            else:
                if raw is not None:
                    logger.warning("Discarding non-record blob for %s (%s)", player_id, type(raw).__name__)
                record = self.new_record()
            return self._install(player_id, record)

    def save(self, player_id: str) -> bool:
        """Write the cached record for player_id to the store. Returns False if nothing was written."""
        with self._lock:
            record = self._records.get(player_id)
            if record is None:
                return False
            try:
                self.store.set(player_id, record.to_wire())
            except InventoryError as e:
                log_error_with_context(
                    error=e,
                    node_name="store",
                    player_id=player_id,
                    operation="save",
                    level=logging.WARNING,
                    exc_info=False,
                )
                return False
            except Exception as e:
                log_error_with_context(error=e, node_name="store", player_id=player_id, operation="save")
                return False
            return True

    def on_join(self, player_id: str) -> InventoryRecord:
        logger.info("Player %s joined", player_id)
        return self.load(player_id)

    def on_leave(self, player_id: str) -> None:
        with self._lock:
            self.save(player_id)
            self._records.pop(player_id, None)
        logger.info("Player %s left", player_id)

    def save_all(self) -> int:
        """Best-effort save of every active record. Returns the number written."""
        with self._lock:
            written = sum(1 for player_id in self.active_players() if self.save(player_id))
            logger.info("Saved %d/%d active inventories", written, len(self._records))
        return written
