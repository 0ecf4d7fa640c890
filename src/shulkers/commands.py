"""CLI commands for Shulkers.

- search: list plugins from one or both catalogs
- info: resolve a plugin name (or ID) to a single plugin
- install: not available yet
"""

from __future__ import annotations

import argparse
from typing import Optional

from rich.console import Console

from . import __version__
from .config import Settings
from .models import SOURCE_OPTIONS, Source
from .resolver import CandidateReason, DisambiguationOutcome, Empty, SingleMatch, SingleReason
from .service import PluginFinder, SearchResults
from .sources import CatalogError
from .views import Timer, show_details, show_results

console = Console()

ID_HINT = "[bold yellow]--id <id> --source <source>[/bold yellow]"


def _error(message: str) -> int:
    console.print(f"[red][bold]Error:[/bold] {message}[/red]")
    return 1


def _parse_limit(value) -> Optional[int]:
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return None
    return limit if limit > 0 else None


def _parse_source(value: str) -> Source:
    """Raise ValueError with a user-facing message for unknown sources."""
    try:
        return Source.from_option(value)
    except ValueError:
        raise ValueError(f"Invalid source '{value}'. Valid sources are: {', '.join(SOURCE_OPTIONS)}") from None


def _settings(args: argparse.Namespace) -> Settings:
    settings = getattr(args, "settings", None)
    return settings if settings is not None else Settings.load()


def _finder(settings: Settings) -> PluginFinder:
    return PluginFinder.from_settings(settings)


def _report_errors(results: SearchResults) -> None:
    for source, message in results.errors.items():
        console.print(f"[yellow]Error searching {source.value}:[/yellow] {message}")


# --- search ---

def cmd_search(args: argparse.Namespace) -> int:
    """Search and display plugins from multiple sources."""
    if not args.query:
        return _error("Search query is required. Run [yellow]shulkers search --help[/yellow] for more information.")

    settings = _settings(args)
    limit = _parse_limit(args.limit if args.limit is not None else settings.search_limit)
    if limit is None:
        return _error("Limit must be a positive number.")

    try:
        source = _parse_source(args.source)
    except ValueError as e:
        return _error(str(e))

    timer = Timer()
    console.print(f"[bold green]📦 Shulkers search[/bold green] {__version__}")

    finder = _finder(settings)
    with console.status("Searching for plugins...", spinner="dots"):
        results = finder.search(args.query, limit, source)

    _report_errors(results)

    if not results.records:
        console.print("[red]✖[/red] No plugins found matching your query.")
        timer.end()
        return 0

    console.print(f"[green]✔[/green] Found {len(results)} plugins matching \"{args.query}\"")
    console.print(
        "\n[green]Use[/green] [bold yellow]shulkers info <name>[/bold yellow] [green]or[/green] "
        "[bold yellow]shulkers info --id <id> --source <source>[/bold yellow] "
        "[green]for more details about a specific plugin.[/green]"
    )
    show_results(results.records, console)
    timer.end()
    return 0


# --- info ---

def _validate_info(args: argparse.Namespace) -> Optional[str]:
    """Return an error message, or None if the arguments are usable."""
    if not args.query and not args.id:
        return "Plugin name or ID is required. Run [yellow]shulkers info --help[/yellow] for more information."
    try:
        source = _parse_source(args.source)
    except ValueError as e:
        return str(e)
    if args.id:
        if source is None:
            return "When using --id, you must specify --source (spigot or modrinth)."
        if source is Source.SPIGOT and not str(args.id).isdigit():
            return f"Spigot resource IDs are numeric, got '{args.id}'."
    return None


def cmd_info(args: argparse.Namespace) -> int:
    """Get information about a plugin."""
    problem = _validate_info(args)
    if problem:
        return _error(problem)

    settings = _settings(args)
    source = Source.from_option(args.source)
    finder = _finder(settings)

    timer = Timer()
    console.print(f"[bold green]📦 Shulkers info[/bold green] {__version__}")

    if args.id:
        rc = _info_by_id(finder, args.id, source)
    else:
        with console.status("Searching for plugin...", spinner="dots"):
            outcome, results = finder.find(
                args.query,
                limit=settings.info_limit,
                source=source,
                threshold=settings.fuzzy_threshold,
            )
        _report_errors(results)
        show_outcome(args.query, outcome, results)
        rc = 0

    timer.end()
    return rc


def _info_by_id(finder: PluginFinder, plugin_id: str, source: Source) -> int:
    try:
        with console.status("Searching for plugin...", spinner="dots"):
            record = finder.lookup(plugin_id, source)
    except CatalogError as e:
        console.print(f"[red]✖[/red] Failed to retrieve plugin information: {e}")
        return 1

    if record is None:
        console.print(f"[red]✖[/red] No plugin found with ID {plugin_id} on {source.value}")
        return 1

    console.print("[green]✔[/green] Successfully retrieved plugin information")
    show_details(record, console)
    return 0


def show_outcome(query: str, outcome: DisambiguationOutcome, results: SearchResults) -> None:
    """Render a resolver decision."""
    if isinstance(outcome, Empty):
        console.print("[red]✖[/red] No plugins found matching your query")
        return

    total = len(results)
    console.print(f"[green]✔[/green] Found {total} plugins matching your query")

    if isinstance(outcome, SingleMatch):
        if outcome.reason is SingleReason.BEST_MATCH:
            console.print(f"[blue]1 results found, {total - 1} excluded.[/blue]")
            console.print(f"[green]Found a best match: \"{outcome.record.display_name}\"[/green]")
        show_details(outcome.record, console)
        return

    shown = len(outcome.records)
    if outcome.reason is CandidateReason.EXACT_NAME_COLLISION:
        console.print(
            f"[green]Found {outcome.exact_matches} exact matches and "
            f"{shown - outcome.exact_matches} partial matches for \"{query}\"[/green]"
        )
        console.print(f"[green]Please choose one specifically or use[/green] {ID_HINT} "
                      "[green]to get details for a specific plugin.[/green]")
    elif outcome.reason is CandidateReason.FUZZY_MULTIPLE_GOOD:
        console.print(f"[blue]{shown} results found, {total - shown} excluded.[/blue]")
        console.print(f"[green]Multiple matches found. Please choose one specifically or use[/green] {ID_HINT} "
                      "[green]to get details for a specific plugin.[/green]")
    else:
        console.print(f"[blue]0 results found, {total} excluded.[/blue]")
        console.print(f"[yellow]No close matches found. Showing all {total} results.[/yellow]")
        console.print(f"[green]Please be more specific or use[/green] {ID_HINT} "
                      "[green]to get details for a specific plugin.[/green]")
    show_results(outcome.records, console)


# --- install ---

def cmd_install(args: argparse.Namespace) -> int:
    """Install plugins (not available yet)."""
    names = ", ".join(args.names) if args.names else "nothing"
    if args.force:
        names += ", forced"
    console.print(f"[yellow]Plugin installation is not available yet (requested: {names}).[/yellow]")
    console.print("Use [bold]shulkers info <name>[/bold] to find the plugin's download page.")
    return 0


# --- Parser Setup ---

def add_commands(subparsers: argparse._SubParsersAction) -> None:
    """Add plugin commands to the main parser."""

    # search
    p_search = subparsers.add_parser("search", help="Search and display plugins from multiple sources")
    p_search.add_argument("query", nargs="?", help="Search query")
    p_search.add_argument("--limit", "-l", help="Limit the number of results (default 10)")
    p_search.add_argument("--source", "-s", default="all", help="Source to search from (all, spigot, modrinth)")
    p_search.set_defaults(func=cmd_search)

    # info
    p_info = subparsers.add_parser("info", help="Get information about a plugin")
    p_info.add_argument("query", nargs="?", metavar="name", help="Plugin name")
    p_info.add_argument("--id", help="Plugin ID (requires --source option)")
    p_info.add_argument("--source", "-s", default="all", help="Plugin source (spigot, modrinth)")
    p_info.set_defaults(func=cmd_info)

    # install
    p_install = subparsers.add_parser("install", aliases=["i"], help="Install plugins")
    p_install.add_argument("names", nargs="*", metavar="name", help="Plugin name")
    p_install.add_argument("--force", "-f", action="store_true", help="Force install plugins")
    p_install.set_defaults(func=cmd_install)


def run_command(args: argparse.Namespace) -> int:
    """Run the selected command if func is set."""
    if hasattr(args, "func") and args.func:
        return args.func(args)
    return -1  # No command selected
