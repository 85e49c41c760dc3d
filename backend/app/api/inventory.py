"""
FastAPI endpoints for player pet inventories.
Snapshot reads, equip/unequip/favorite notifications, pet grants and session join/leave.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from backend.app.core.inventory_manager import InventoryManager
from backend.app.models.inventory import (
    EquipActionRequest,
    InventoryRecord,
    MutationResult,
    PetNameRequest,
)
from backend.app.models.pet import PetDefinition

logger = logging.getLogger(__name__)

router = APIRouter(tags=["inventory"])


def get_inventory_manager(request: Request) -> InventoryManager:
    """FastAPI dependency returning the app-wide InventoryManager."""
    manager = getattr(request.app.state, "inventory_manager", None)
    if manager is None:
        raise HTTPException(status_code=503, detail="Inventory manager not initialized")
    return manager


@router.get("/pets", response_model=List[PetDefinition])
def list_pets(manager: InventoryManager = Depends(get_inventory_manager)):
    """List the pet catalog in catalog order."""
    return list(manager.catalog.values())


@router.get("/pets/{pet_name}", response_model=PetDefinition)
def get_pet(pet_name: str, manager: InventoryManager = Depends(get_inventory_manager)):
    """Get a single pet definition."""
    pet = manager.catalog.get(pet_name)
    if pet is None:
        raise HTTPException(status_code=404, detail=f"Pet '{pet_name}' not found")
    return pet


@router.post("/sessions/{player_id}/join", response_model=InventoryRecord)
def join_session(player_id: str, manager: InventoryManager = Depends(get_inventory_manager)):
    """Player joined: load their record from the store (defaults on any failure)."""
    return manager.on_join(player_id)


@router.post("/sessions/{player_id}/leave", status_code=status.HTTP_204_NO_CONTENT)
def leave_session(player_id: str, manager: InventoryManager = Depends(get_inventory_manager)):
    """Player left: save their record and evict it from memory."""
    manager.on_leave(player_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/inventory/{player_id}", response_model=InventoryRecord)
def get_inventory(player_id: str, manager: InventoryManager = Depends(get_inventory_manager)):
    """Current inventory snapshot, created with starter pets if the player has none yet."""
    return manager.get_or_create(player_id)


@router.post(
    "/inventory/{player_id}/equip",
    response_model=MutationResult,
    status_code=status.HTTP_202_ACCEPTED,
)
def equip_action(
    player_id: str,
    request: EquipActionRequest,
    manager: InventoryManager = Depends(get_inventory_manager),
):
    """
    Equip notification: {"action": "equip", "target": pet name}
    or {"action": "unequip", "target": slot index}.
    Always accepted; the result says whether anything changed.
    """
    return manager.handle_equip_action(player_id, request.action, request.target)


@router.post(
    "/inventory/{player_id}/favorite",
    response_model=MutationResult,
    status_code=status.HTTP_202_ACCEPTED,
)
def toggle_favorite(
    player_id: str,
    request: PetNameRequest,
    manager: InventoryManager = Depends(get_inventory_manager),
):
    """Favorite toggle notification."""
    return manager.toggle_favorite(player_id, request.pet_name)


@router.post(
    "/inventory/{player_id}/pets",
    response_model=MutationResult,
    status_code=status.HTTP_202_ACCEPTED,
)
def add_pet(
    player_id: str,
    request: PetNameRequest,
    manager: InventoryManager = Depends(get_inventory_manager),
):
    """Grant one copy of a pet."""
    result = manager.add_pet(player_id, request.pet_name)
    if result.applied:
        logger.info("Granted %s to %s", request.pet_name, player_id)
    return result
