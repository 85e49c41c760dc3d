"""`petkeeper catalog` — show the pet catalog as the server would load it."""
from __future__ import annotations

from backend.app.config import CATALOG_PATH, STARTER_PET_COUNT
from backend.app.core.pet_catalog import load_pet_catalog, starter_pets


def register(subparsers) -> None:
    p = subparsers.add_parser("catalog", help="Show the pet catalog")
    p.add_argument("--path", type=str, default=None, help="Catalog YAML (default: PETS_CATALOG_PATH)")
    p.set_defaults(func=run)


def run(args) -> int:
    catalog = load_pet_catalog(args.path) if args.path else load_pet_catalog()
    print(f"Pet catalog ({args.path or CATALOG_PATH}):")
    print()
    starters = set(starter_pets(catalog, STARTER_PET_COUNT))
    for name, pet in catalog.items():
        line = f"- {name}: display={pet.display_name} strength={pet.strength} rarity={pet.rarity}"
        if name in starters:
            line += " [starter]"
        print(line)
    return 0
