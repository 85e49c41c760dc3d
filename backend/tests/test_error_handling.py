"""Tests for structured error responses and contextual error logging."""
from __future__ import annotations

import logging

from backend.app.core.error_handling import create_error_response, log_error_with_context
from backend.app.core.errors import StoreUnavailableError


def test_create_error_response_minimal() -> None:
    assert create_error_response("X", "msg") == {"error_code": "X", "message": "msg"}


def test_create_error_response_with_node_and_details() -> None:
    body = create_error_response("INVENTORY_HTTP_404", "missing", node="inventory", details={"path": "/x"})
    assert body["node"] == "inventory"
    assert body["details"] == {"path": "/x"}


def test_log_error_with_context_includes_player(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        log_error_with_context(
            StoreUnavailableError("p7"),
            node_name="store",
            player_id="p7",
            operation="save",
            level=logging.WARNING,
            exc_info=False,
        )
    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert "player_id=p7" in record.getMessage()
    assert record.operation == "save"
    assert record.node_name == "store"
