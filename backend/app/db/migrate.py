"""Schema migration: applies numbered SQL files from migrations/ in order.

Idempotent: each migration name recorded in schema_migrations; applied once.

Usage:
    python -m backend.app.db.migrate --db ./data/pets.db
"""
import argparse
import logging
import sqlite3
from pathlib import Path
from datetime import datetime, timezone

from backend.app.db.connection import get_connection

logger = logging.getLogger(__name__)

SCHEMA_MIGRATIONS_TABLE = """
CREATE TABLE IF NOT EXISTS schema_migrations (
  name TEXT PRIMARY KEY,
  applied_at TEXT NOT NULL
);
"""

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


def _migration_files() -> list[Path]:
    """Return sorted list of .sql files in migrations/ (0001_*.sql, 0002_*.sql, ...)."""
    if not MIGRATIONS_DIR.exists():
        return []
    return sorted(MIGRATIONS_DIR.glob("*.sql"))


def apply_schema(db_path: str) -> list[str]:
    """Apply all pending migrations from migrations/ in order. Returns names applied."""
    conn = get_connection(db_path)
    applied: list[str] = []

    try:
        conn.executescript(SCHEMA_MIGRATIONS_TABLE)
        conn.commit()

        cursor = conn.cursor()
        for fp in _migration_files():
            name = fp.stem  # e.g. 0001_init
            cursor.execute(
                "SELECT name FROM schema_migrations WHERE name = ?",
                (name,),
            )
            if cursor.fetchone():
                continue
            sql = fp.read_text(encoding="utf-8")
            try:
                conn.executescript(sql)
            except sqlite3.OperationalError as e:
                if "duplicate column" not in str(e).lower():
                    raise
            now = datetime.now(timezone.utc).isoformat()
            cursor.execute(
                "INSERT INTO schema_migrations (name, applied_at) VALUES (?, ?)",
                (name, now),
            )
            conn.commit()
            applied.append(name)
            logger.info("Applied migration %s to %s", name, db_path)
    finally:
        conn.close()
    return applied


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Apply migrations to SQLite database."
    )
    parser.add_argument(
        "--db",
        type=str,
        default="./data/pets.db",
        help="Path to SQLite database file",
    )
    args = parser.parse_args()
    apply_schema(args.db)
    print(f"Migrations applied: {args.db}")


if __name__ == "__main__":
    main()
