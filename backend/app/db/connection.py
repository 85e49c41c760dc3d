"""SQLite connection factory for the inventory blob store.

Provides configured connections with:
- sqlite3.Row row factory (dict-like access)
- a busy timeout so concurrent saves wait instead of failing immediately
"""
import sqlite3
from pathlib import Path

BUSY_TIMEOUT_SECONDS = 5.0


def get_connection(db_path: str) -> sqlite3.Connection:
    """Return a configured SQLite connection.

    Args:
        db_path: Path to the SQLite database file. Parent directories
                 are created if they do not exist.

    Returns:
        sqlite3.Connection with row_factory=sqlite3.Row.

    Note:
        The connection does not auto-close; callers must close it.
    """
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(path), timeout=BUSY_TIMEOUT_SECONDS)
    conn.row_factory = sqlite3.Row
    return conn
