"""HTTP client for the pet inventory API (catalog, sessions, inventory snapshot and notifications)."""
from __future__ import annotations

from typing import Any

import httpx

from shared.config import API_BASE_URL

DEFAULT_BASE_URL = API_BASE_URL


def _client(
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = 10.0,
    transport: httpx.BaseTransport | None = None,
    token: str | None = None,
) -> httpx.Client:
    headers = {"Authorization": f"Bearer {token}"} if token else None
    return httpx.Client(
        base_url=base_url.rstrip("/") or DEFAULT_BASE_URL,
        timeout=timeout,
        transport=transport,
        headers=headers,
    )


def list_pets(
    base_url: str = DEFAULT_BASE_URL,
    transport: httpx.BaseTransport | None = None,
    token: str | None = None,
) -> list[dict[str, Any]]:
    """GET /pets. Returns catalog entries in catalog order."""
    with _client(base_url, transport=transport, token=token) as c:
        r = c.get("/pets")
        r.raise_for_status()
        return r.json()


def join(
    player_id: str,
    base_url: str = DEFAULT_BASE_URL,
    transport: httpx.BaseTransport | None = None,
    token: str | None = None,
) -> dict[str, Any]:
    """POST /sessions/{player_id}/join. Returns the loaded inventory."""
    with _client(base_url, transport=transport, token=token) as c:
        r = c.post(f"/sessions/{player_id}/join")
        r.raise_for_status()
        return r.json()


def leave(
    player_id: str,
    base_url: str = DEFAULT_BASE_URL,
    transport: httpx.BaseTransport | None = None,
    token: str | None = None,
) -> None:
    """POST /sessions/{player_id}/leave. Saves and evicts the record."""
    with _client(base_url, transport=transport, token=token) as c:
        r = c.post(f"/sessions/{player_id}/leave")
        r.raise_for_status()


def get_inventory(
    player_id: str,
    base_url: str = DEFAULT_BASE_URL,
    transport: httpx.BaseTransport | None = None,
    token: str | None = None,
) -> dict[str, Any]:
    """GET /inventory/{player_id}. Returns {schemaVersion, inventory, equippedPets, favorites}."""
    with _client(base_url, transport=transport, token=token) as c:
        r = c.get(f"/inventory/{player_id}")
        r.raise_for_status()
        return r.json()


def _post_notification(
    path: str,
    payload: dict[str, Any],
    base_url: str,
    transport: httpx.BaseTransport | None,
    token: str | None,
) -> dict[str, Any]:
    with _client(base_url, transport=transport, token=token) as c:
        r = c.post(path, json=payload)
        r.raise_for_status()
        return r.json()


def equip_pet(
    player_id: str,
    pet_name: str,
    base_url: str = DEFAULT_BASE_URL,
    transport: httpx.BaseTransport | None = None,
    token: str | None = None,
) -> dict[str, Any]:
    """POST /inventory/{player_id}/equip with action=equip. Returns the mutation result."""
    return _post_notification(
        f"/inventory/{player_id}/equip",
        {"action": "equip", "target": pet_name},
        base_url,
        transport,
        token,
    )


def unequip_pet(
    player_id: str,
    slot_index: int,
    base_url: str = DEFAULT_BASE_URL,
    transport: httpx.BaseTransport | None = None,
    token: str | None = None,
) -> dict[str, Any]:
    """POST /inventory/{player_id}/equip with action=unequip (slot_index is 1-based)."""
    return _post_notification(
        f"/inventory/{player_id}/equip",
        {"action": "unequip", "target": int(slot_index)},
        base_url,
        transport,
        token,
    )


def toggle_favorite(
    player_id: str,
    pet_name: str,
    base_url: str = DEFAULT_BASE_URL,
    transport: httpx.BaseTransport | None = None,
    token: str | None = None,
) -> dict[str, Any]:
    """POST /inventory/{player_id}/favorite."""
    return _post_notification(
        f"/inventory/{player_id}/favorite",
        {"pet_name": pet_name},
        base_url,
        transport,
        token,
    )


def add_pet(
    player_id: str,
    pet_name: str,
    base_url: str = DEFAULT_BASE_URL,
    transport: httpx.BaseTransport | None = None,
    token: str | None = None,
) -> dict[str, Any]:
    """POST /inventory/{player_id}/pets."""
    return _post_notification(
        f"/inventory/{player_id}/pets",
        {"pet_name": pet_name},
        base_url,
        transport,
        token,
    )
