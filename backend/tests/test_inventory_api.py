"""Tests for the inventory HTTP API (snapshot, notifications, sessions, catalog)."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient

from backend.app.core.inventory_manager import InventoryManager
from backend.main import app


@pytest.fixture
def client(memory_store, catalog):
    previous = getattr(app.state, "inventory_manager", None)
    app.state.inventory_manager = InventoryManager(memory_store, catalog)
    try:
        yield TestClient(app)
    finally:
        app.state.inventory_manager = previous


def test_fresh_inventory_snapshot(client) -> None:
    res = client.get("/inventory/p1")
    assert res.status_code == 200
    assert res.json() == {
        "schemaVersion": 2,
        "inventory": {"Cat": 1, "Dog": 1, "Fox": 1},
        "equippedPets": [],
        "favorites": [],
    }


def test_equip_and_unequip_notifications(client) -> None:
    res = client.post("/inventory/p1/equip", json={"action": "equip", "target": "Cat"})
    assert res.status_code == 202
    body = res.json()
    assert body["applied"] is True
    assert body["record"]["equippedPets"] == ["Cat"]

    snapshot = client.get("/inventory/p1").json()
    assert snapshot["inventory"] == {"Dog": 1, "Fox": 1}

    res = client.post("/inventory/p1/equip", json={"action": "unequip", "target": 1})
    assert res.status_code == 202
    assert client.get("/inventory/p1").json()["inventory"] == {"Dog": 1, "Fox": 1, "Cat": 1}


def test_rejected_equip_is_still_accepted(client) -> None:
    res = client.post("/inventory/p1/equip", json={"action": "equip", "target": "Owl"})
    assert res.status_code == 202
    body = res.json()
    assert body["applied"] is False
    assert body["reason"] == "not_in_inventory"


def test_unequip_empty_slot_reports_invalid_slot(client) -> None:
    res = client.post("/inventory/p1/equip", json={"action": "unequip", "target": 3})
    assert res.status_code == 202
    assert res.json()["reason"] == "invalid_slot"


def test_favorite_toggle(client) -> None:
    client.post("/inventory/p1/favorite", json={"pet_name": "Dog"})
    assert client.get("/inventory/p1").json()["favorites"] == ["Dog"]
    client.post("/inventory/p1/favorite", json={"petName": "Dog"})
    assert client.get("/inventory/p1").json()["favorites"] == []


def test_add_pet(client) -> None:
    res = client.post("/inventory/p1/pets", json={"pet_name": "Owl"})
    assert res.status_code == 202
    assert res.json()["record"]["inventory"]["Owl"] == 1


def test_blank_pet_name_is_validation_error(client) -> None:
    res = client.post("/inventory/p1/pets", json={"pet_name": ""})
    assert res.status_code == 422


def test_session_join_and_leave_persist(client, memory_store) -> None:
    memory_store.set("p1", {"inventory": ["Cat", "Cat", "Dog"]})
    res = client.post("/sessions/p1/join")
    assert res.status_code == 200
    assert res.json()["inventory"] == {"Cat": 2, "Dog": 1}

    client.post("/inventory/p1/equip", json={"action": "equip", "target": "Cat"})
    res = client.post("/sessions/p1/leave")
    assert res.status_code == 204
    assert memory_store.get("p1")["equippedPets"] == ["Cat"]
    assert app.state.inventory_manager.active_players() == []


def test_pet_catalog_routes(client) -> None:
    res = client.get("/pets")
    assert res.status_code == 200
    assert [p["name"] for p in res.json()] == ["Cat", "Dog", "Fox", "Owl"]

    res = client.get("/pets/Fox")
    assert res.status_code == 200
    assert res.json()["rarity"] == "Rare"


def test_unknown_pet_returns_structured_404(client) -> None:
    res = client.get("/pets/Dragon")
    assert res.status_code == 404
    payload = res.json()
    assert payload["error_code"] == "CATALOG_HTTP_404"
    assert "Dragon" in payload["message"]


def test_root_and_health() -> None:
    client = TestClient(app)
    assert client.get("/").json()["message"] == "Pet Inventory API"
    assert client.get("/health").json() == {"status": "healthy"}


def test_concurrent_add_requests_are_all_counted(client) -> None:
    def add(_: int) -> int:
        return client.post("/inventory/p2/pets", json={"pet_name": "Owl"}).status_code

    with ThreadPoolExecutor(max_workers=16) as pool:
        statuses = list(pool.map(add, range(200)))

    assert statuses == [202] * 200
    assert client.get("/inventory/p2").json()["inventory"]["Owl"] == 200


def test_concurrent_equip_requests_respect_slot_limit(client) -> None:
    for _ in range(20):
        client.post("/inventory/p3/pets", json={"pet_name": "Owl"})

    def equip(_: int) -> bool:
        res = client.post("/inventory/p3/equip", json={"action": "equip", "target": "Owl"})
        return res.json()["applied"]

    with ThreadPoolExecutor(max_workers=16) as pool:
        applied = list(pool.map(equip, range(20)))

    snapshot = client.get("/inventory/p3").json()
    assert sum(applied) == 5
    assert snapshot["equippedPets"] == ["Owl"] * 5
    assert snapshot["inventory"]["Owl"] == 15
