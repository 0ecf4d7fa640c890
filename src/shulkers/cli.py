"""Shulkers CLI - find Minecraft server plugins.

Usage:
    shulkers search <query> [--limit N] [--source all|spigot|modrinth]
    shulkers info <name> [--source all|spigot|modrinth]
    shulkers info --id <id> --source spigot|modrinth
    shulkers install <name...>
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from rich.console import Console

from . import __version__
from .commands import add_commands, run_command
from .config import Settings
from .log import configure_logging

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shulkers",
        description="Shulkers: search Spigot and Modrinth for server plugins",
    )
    parser.add_argument("--version", "-V", action="store_true", help="Show version")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")

    sub = parser.add_subparsers(dest="subcmd")
    add_commands(sub)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        console.print(__version__)
        return

    settings = Settings.load()
    configure_logging("DEBUG" if args.verbose else settings.log_level)
    args.settings = settings

    try:
        rc = run_command(args)
    except KeyboardInterrupt:
        console.print("\n[red]❌ Operation canceled.[/red]")
        raise SystemExit(0)

    if rc == -1:
        parser.print_help()
        raise SystemExit(0)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
