"""``petkeeper inventory`` — drive a player's inventory through a running API.

    petkeeper inventory show <player>
    petkeeper inventory equip <player> <pet>
    petkeeper inventory unequip <player> <slot>
    petkeeper inventory favorite <player> <pet>
    petkeeper inventory add <player> <pet>
    petkeeper inventory join <player>
    petkeeper inventory leave <player>
"""
from __future__ import annotations

import os

import httpx

from shared.config import API_BASE_URL


def register(subparsers) -> None:
    p = subparsers.add_parser("inventory", help="Show or change a player's inventory")
    p.add_argument("--url", type=str, default=API_BASE_URL, help=f"API base URL (default: {API_BASE_URL})")
    actions = p.add_subparsers(dest="action", required=True)

    for name, help_text in (
        ("show", "Print the inventory panel"),
        ("join", "Start a session (load from storage)"),
        ("leave", "End a session (save and evict)"),
    ):
        a = actions.add_parser(name, help=help_text)
        a.add_argument("player_id")

    for name, help_text in (
        ("equip", "Equip a held pet"),
        ("favorite", "Toggle a pet's favorite mark"),
        ("add", "Grant one copy of a pet"),
    ):
        a = actions.add_parser(name, help=help_text)
        a.add_argument("player_id")
        a.add_argument("pet_name")

    a = actions.add_parser("unequip", help="Unequip the pet in a slot (1-based)")
    a.add_argument("player_id")
    a.add_argument("slot", type=int)

    p.set_defaults(func=run)


def _print_result(result: dict) -> None:
    if result.get("applied"):
        print(f"  {result.get('operation')}: ok")
    else:
        print(f"  {result.get('operation')}: no change ({result.get('reason')})")


def _show(player_id: str, base_url: str, token: str | None) -> None:
    from ui.api_client import get_inventory, list_pets
    from ui.inventory_view import build_inventory_view, render_text

    record = get_inventory(player_id, base_url=base_url, token=token)
    catalog = list_pets(base_url=base_url, token=token)
    print(render_text(build_inventory_view(record, catalog)))


def run(args) -> int:
    from ui import api_client

    token = os.environ.get("PETS_API_TOKEN", "").strip() or None
    base_url = args.url
    try:
        if args.action == "show":
            _show(args.player_id, base_url, token)
        elif args.action == "join":
            api_client.join(args.player_id, base_url=base_url, token=token)
            _show(args.player_id, base_url, token)
        elif args.action == "leave":
            api_client.leave(args.player_id, base_url=base_url, token=token)
            print(f"  Saved and closed session for {args.player_id}")
        elif args.action == "equip":
            _print_result(api_client.equip_pet(args.player_id, args.pet_name, base_url=base_url, token=token))
        elif args.action == "unequip":
            _print_result(api_client.unequip_pet(args.player_id, args.slot, base_url=base_url, token=token))
        elif args.action == "favorite":
            _print_result(api_client.toggle_favorite(args.player_id, args.pet_name, base_url=base_url, token=token))
        elif args.action == "add":
            _print_result(api_client.add_pet(args.player_id, args.pet_name, base_url=base_url, token=token))
    except httpx.HTTPError as e:
        print(f"  ERROR: request to {base_url} failed: {e}")
        return 1
    return 0
