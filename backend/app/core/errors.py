"""Inventory error taxonomy.

Store errors are raised by the blob store and absorbed by the inventory manager
at the Load/Save boundary. Rejected mutations are reported as MutationReason
values on a MutationResult, never raised.
"""
from __future__ import annotations


class InventoryError(Exception):
    """Base class for inventory service errors."""


class StoreUnavailableError(InventoryError):
    """Persistent store could not be reached or rejected the request."""

    def __init__(self, key: str, message: str = ""):
        self.key = key
        super().__init__(message or f"Store unavailable for key {key!r}")


class MalformedRecordError(InventoryError):
    """Stored blob could not be decoded into a record shape."""

    def __init__(self, key: str, message: str = ""):
        self.key = key
        super().__init__(message or f"Malformed record for key {key!r}")
