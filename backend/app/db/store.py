"""Key-value blob stores for per-player inventory records.

A store holds one JSON document per player id. ``get`` returns the decoded
document or None when the key is absent; both operations raise
StoreUnavailableError / MalformedRecordError and leave it to the caller to
decide whether that matters.
"""
from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Protocol

from backend.app.config import INVENTORY_TABLE_NAME
from backend.app.core.errors import MalformedRecordError, StoreUnavailableError
from backend.app.db.connection import get_connection

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: dict[str, Any]) -> None: ...


def _decode(key: str, raw: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedRecordError(key, f"Undecodable blob for {key!r}: {e}") from e


class SqliteBlobStore:
    """Blob store backed by the player_inventories table."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def get(self, key: str) -> Any | None:
        try:
            conn = get_connection(self.db_path)
            try:
                row = conn.execute(
                    f"SELECT data_json FROM {INVENTORY_TABLE_NAME} WHERE player_id = ?",
                    (key,),
                ).fetchone()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as e:
            raise StoreUnavailableError(key, f"Read failed for {key!r}: {e}") from e
        if row is None:
            return None
        return _decode(key, row["data_json"])

    def set(self, key: str, value: dict[str, Any]) -> None:
        payload = json.dumps(value, sort_keys=True)
        now = datetime.now(timezone.utc).isoformat()
        try:
            conn = get_connection(self.db_path)
            try:
                conn.execute(
                    f"""
                    INSERT INTO {INVENTORY_TABLE_NAME} (player_id, data_json, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(player_id) DO UPDATE SET
                      data_json = excluded.data_json,
                      updated_at = excluded.updated_at
                    """,
                    (key, payload, now),
                )
                conn.commit()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as e:
            raise StoreUnavailableError(key, f"Write failed for {key!r}: {e}") from e
        logger.debug("Stored inventory blob for %s (%d bytes)", key, len(payload))


class MemoryBlobStore:
    """In-process blob store; values round-trip through JSON like a real blob."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._blobs: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._blobs[key] = json.dumps(value)

    def get(self, key: str) -> Any | None:
        raw = self._blobs.get(key)
        if raw is None:
            return None
        return _decode(key, raw)

    def set(self, key: str, value: dict[str, Any]) -> None:
        self._blobs[key] = json.dumps(value, sort_keys=True)

    def put_raw(self, key: str, raw: str) -> None:
        """Store an undecoded blob as-is (for seeding legacy or corrupt data)."""
        self._blobs[key] = raw

    def keys(self) -> list[str]:
        return sorted(self._blobs)
