"""``petkeeper doctor`` — environment health check.

Checks: Python version, deps installed, pet catalog readable, database
migrated and writable.
"""
from __future__ import annotations

import importlib.util
import sqlite3
import sys
from pathlib import Path

# ANSI helpers (no-op on dumb terminals)
_COLOR = hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _ok(msg: str) -> str:
    return f"  [OK]   {msg}" if not _COLOR else f"  \033[32m[OK]\033[0m   {msg}"


def _warn(msg: str) -> str:
    return f"  [WARN] {msg}" if not _COLOR else f"  \033[33m[WARN]\033[0m {msg}"


def _fail(msg: str) -> str:
    return f"  [FAIL] {msg}" if not _COLOR else f"  \033[31m[FAIL]\033[0m {msg}"


def _section(title: str) -> str:
    return f"\n{'=' * 60}\n  {title}\n{'=' * 60}"


def register(subparsers) -> None:
    p = subparsers.add_parser("doctor", help="Check environment health")
    p.add_argument("--db", type=str, default=None, help="Database path (default: PETS_DB_PATH)")
    p.set_defaults(func=run)


def _check_python() -> bool:
    v = sys.version_info
    ok = v >= (3, 10)
    line = f"Python {v.major}.{v.minor}.{v.micro}"
    print(_ok(line) if ok else _fail(f"{line} — need 3.10+"))
    return ok


def _check_deps() -> list[str]:
    required = ["fastapi", "uvicorn", "pydantic", "yaml", "httpx"]
    missing = []
    for mod in required:
        try:
            if importlib.util.find_spec(mod) is None:
                missing.append(mod)
        except (ImportError, ValueError):
            missing.append(mod)
    if missing:
        print(_fail(f"Missing packages: {', '.join(missing)}"))
        print("         Run: pip install -e .")
    else:
        print(_ok(f"All {len(required)} required packages installed"))
    return missing


def _check_catalog() -> bool:
    from backend.app.config import CATALOG_PATH, STARTER_PET_COUNT
    from backend.app.core.pet_catalog import load_pet_catalog, starter_pets

    if not CATALOG_PATH.exists():
        print(_warn(f"Pet catalog missing at {CATALOG_PATH} — built-in catalog in use"))
    catalog = load_pet_catalog()
    if not catalog:
        print(_fail("Pet catalog is empty"))
        return False
    print(_ok(f"Pet catalog: {len(catalog)} pets"))
    starters = starter_pets(catalog, STARTER_PET_COUNT)
    if len(starters) < STARTER_PET_COUNT:
        print(_warn(f"Only {len(starters)} starter pets available (wanted {STARTER_PET_COUNT})"))
    else:
        print(_ok(f"Starter pets: {', '.join(starters)}"))
    return True


def _check_database(db_path: str) -> bool:
    from backend.app.config import INVENTORY_TABLE_NAME
    from backend.app.db.migrate import apply_schema

    try:
        applied = apply_schema(db_path)
    except (sqlite3.Error, OSError) as e:
        print(_fail(f"Database not usable at {db_path}: {e}"))
        return False
    if applied:
        print(_ok(f"Applied migrations: {', '.join(applied)}"))
    conn = sqlite3.connect(db_path)
    try:
        count = conn.execute(f"SELECT COUNT(*) FROM {INVENTORY_TABLE_NAME}").fetchone()[0]
    except sqlite3.Error as e:
        print(_fail(f"Inventory table unreadable: {e}"))
        return False
    finally:
        conn.close()
    print(_ok(f"Database {Path(db_path)} ({count} stored inventories)"))
    return True


def run(args) -> int:
    from backend.app.config import DEFAULT_DB_PATH

    print(_section("Pet Inventory Doctor"))
    errors = 0

    if not _check_python():
        errors += 1

    if _check_deps():
        errors += 1

    if not _check_catalog():
        errors += 1

    if not _check_database(args.db or DEFAULT_DB_PATH):
        errors += 1

    print()
    if errors == 0:
        print(_ok("All checks passed — ready to run!"))
        return 0
    print(_fail(f"{errors} issue(s) found — see above for fixes"))
    return 1
