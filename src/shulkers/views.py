"""Terminal rendering for search results and plugin details."""

from __future__ import annotations

import time
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .models import UNKNOWN, CatalogRecord, Source

console = Console()

MAX_NAME_LENGTH = 35


def format_downloads(downloads: Optional[int]) -> str:
    """Format a download count as 1.2M / 3.4K / 567."""
    if downloads is None:
        return UNKNOWN
    if downloads >= 1_000_000:
        return f"{downloads / 1_000_000:.1f}M"
    if downloads >= 1_000:
        return f"{downloads / 1_000:.1f}K"
    return str(downloads)


def truncate_name(name: str, max_length: int = MAX_NAME_LENGTH) -> str:
    if not name:
        return UNKNOWN
    return name[:max_length] + "..." if len(name) > max_length else name


def results_table(records: Sequence[CatalogRecord], title: Optional[str] = None) -> Table:
    """Build the candidate list table."""
    table = Table(title=title, box=box.SIMPLE_HEAD)
    table.add_column("Name", style="yellow", justify="left")
    table.add_column("Author", style="cyan", justify="center")
    table.add_column("ID", justify="center")
    table.add_column("Version", justify="center")
    table.add_column("Downloads", justify="center")
    table.add_column("Source", style="magenta", justify="center")

    for record in records:
        table.add_row(
            truncate_name(record.display_name),
            record.author,
            record.id or UNKNOWN,
            record.latest_version,
            format_downloads(record.downloads),
            record.source.value,
        )
    return table


def show_results(records: Sequence[CatalogRecord], out: Optional[Console] = None) -> None:
    out = out or console
    if not records:
        out.print("No results to display.")
        return
    out.print(results_table(records))


def details_panel(record: CatalogRecord) -> Panel:
    """Build the single-plugin detail view."""
    lines = [
        f"[bold yellow]Name:[/bold yellow] {record.display_name or UNKNOWN}",
        f"[bold cyan]Source:[/bold cyan] {record.source.value}",
        f"[bold magenta]ID:[/bold magenta] {record.id or UNKNOWN}",
        f"[bold blue]Author:[/bold blue] {record.author}",
        f"[bold blue]Latest Version:[/bold blue] {record.latest_version}",
        f"[bold blue]Support Version:[/bold blue] {', '.join(record.supported_versions) or UNKNOWN}",
        f"[bold blue]Downloads:[/bold blue] {format_downloads(record.downloads)}",
        f"[bold blue]Categories:[/bold blue] {', '.join(record.categories) or 'None'}",
    ]
    if record.description:
        label = "Tags" if record.source is Source.SPIGOT else "Description"
        lines.append(f"[bold blue]{label}:[/bold blue] {record.description}")
    return Panel("\n".join(lines), title="Plugin Details", border_style="green")


def show_details(record: CatalogRecord, out: Optional[Console] = None) -> None:
    (out or console).print(details_panel(record))


def format_duration(seconds: float) -> str:
    """Human-readable elapsed time: 1m 5.20s / 2.345s / 120ms."""
    if seconds > 60:
        minutes = int(seconds // 60)
        return f"{minutes}m {seconds - minutes * 60:.2f}s"
    if seconds >= 1:
        whole = int(seconds)
        return f"{whole}.{int((seconds - whole) * 1000):03d}s"
    return f"{round(seconds * 1000)}ms"


class Timer:
    """Measures a command's wall time."""

    def __init__(self, clock=time.perf_counter):
        self._clock = clock
        self._start = clock()

    def elapsed(self) -> float:
        return self._clock() - self._start

    def end(self, show: bool = True, out: Optional[Console] = None) -> str:
        text = format_duration(self.elapsed())
        if show:
            (out or console).print(f"\n[green]✨ Done in[/green] {text}")
        return text
