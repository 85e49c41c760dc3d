"""``petkeeper migrate`` — apply SQL migrations to the inventory database."""
from __future__ import annotations


def register(subparsers) -> None:
    p = subparsers.add_parser("migrate", help="Apply database migrations")
    p.add_argument("--db", type=str, default=None, help="Database path (default: PETS_DB_PATH)")
    p.set_defaults(func=run)


def run(args) -> int:
    from backend.app.config import DEFAULT_DB_PATH
    from backend.app.db.migrate import apply_schema

    db_path = args.db or DEFAULT_DB_PATH
    applied = apply_schema(db_path)
    if applied:
        print(f"Applied {len(applied)} migration(s) to {db_path}: {', '.join(applied)}")
    else:
        print(f"Database up to date: {db_path}")
    return 0
