"""Pet inventory service – unified CLI dispatcher.

All subcommands live in ``petkeeper/commands/*.py`` and expose a
``register(subparsers)`` function that adds themselves to argparse.
"""
from __future__ import annotations

import argparse
import sys

from petkeeper.commands.registry import register_all


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="petkeeper",
        description="Pet inventory service CLI",
    )
    sub = parser.add_subparsers(dest="command")
    register_all(sub)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    # Each command stores a ``func`` on the namespace
    rc = args.func(args)
    sys.exit(rc or 0)
