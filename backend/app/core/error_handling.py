"""Error handling utilities: structured logging and error responses."""
from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def log_error_with_context(
    error: Exception,
    node_name: str,
    player_id: str | None = None,
    operation: str | None = None,
    extra_context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
    exc_info: bool = True,
) -> None:
    """
    Log an error with context: player_id, operation, node name, and optionally the stack trace.

    Args:
        error: The exception that occurred
        node_name: Component where the error happened (e.g., 'store', 'api', 'inventory')
        player_id: Player the failing operation belonged to
        operation: Operation name (e.g., 'load', 'save')
        extra_context: Additional context dict to include in log
        level: Logging level; absorbed store failures log at WARNING
        exc_info: Attach the traceback
    """
    context_parts = []
    if player_id:
        context_parts.append(f"player_id={player_id}")
    if operation:
        context_parts.append(f"operation={operation}")
    context_str = ", ".join(context_parts) if context_parts else "no context"

    extra = {}
    if extra_context:
        extra.update(extra_context)
    if player_id:
        extra["player_id"] = player_id
    if operation:
        extra["operation"] = operation
    extra["node_name"] = node_name

    logger.log(
        level,
        "[%s] Error: %s: %s (%s)",
        node_name,
        type(error).__name__,
        error,
        context_str,
        exc_info=exc_info,
        extra=extra,
    )


def create_error_response(
    error_code: str,
    message: str,
    node: str | None = None,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Create a structured error response for API endpoints.

    Args:
        error_code: Error code (e.g., 'INVENTORY_HTTP_404', 'AUTH_HTTP_401')
        message: Human-readable error message
        node: Component where the error occurred
        details: Additional error details

    Returns:
        Structured error dict
    """
    response: dict[str, Any] = {
        "error_code": error_code,
        "message": message,
    }
    if node:
        response["node"] = node
    if details:
        response["details"] = details
    return response
