"""Rich console output for the depsync CLI."""

import os
from typing import Any, Iterable, List, Optional, Tuple

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from ._enrichment.models import EnrichmentGapReport
from ._lockfiles.models import LockfileParseResult

IS_CI = os.getenv("CI") == "true" or os.getenv("GITHUB_ACTIONS") == "true"

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "highlight": "magenta",
    }
)

console = Console(theme=custom_theme, force_terminal=IS_CI or None, color_system="auto")


def print_summary_table(
    title: str,
    data: List[Tuple[str, Any]],
    show_if_empty: bool = False,
) -> None:
    """
    Print a two-column metric table.

    Args:
        title: Table title
        data: List of (label, value) tuples
        show_if_empty: Whether to keep rows whose value is 0/empty
    """
    if not show_if_empty:
        data = [(label, value) for label, value in data if value]

    if not data:
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    for label, value in data:
        table.add_row(label, str(value))

    console.print(table)


def print_parse_result(result: LockfileParseResult) -> None:
    """Print parsed dependencies as a table."""
    if result.is_empty:
        console.print(f"[warning]No dependencies found in {result.lockfile_type}[/warning]")
        return

    table = Table(title=f"{result.lockfile_type} ({len(result)} dependencies)", show_header=True, header_style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("Version")
    table.add_column("Direct", justify="center")
    table.add_column("PURL", style="highlight", overflow="fold")

    for dep in result.dependencies:
        table.add_row(dep.name, dep.version or "-", "✓" if dep.is_direct else "", dep.purl)

    console.print(table)


def print_formats(filenames: Iterable[str]) -> None:
    table = Table(title="Supported dependency files", show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("File", style="cyan")
    for index, filename in enumerate(filenames, start=1):
        table.add_row(str(index), filename)
    console.print(table)


def print_sync_summary(
    repository: str,
    status: str,
    source: Optional[str] = None,
    confidence: Optional[str] = None,
    package_count: int = 0,
    direct_count: int = 0,
    transitive_count: int = 0,
    depth_classified: bool = False,
) -> None:
    """Print the acquisition and graph write outcome."""
    data = [
        ("Repository", repository),
        ("Status", status),
        ("Source", source or "-"),
        ("Confidence", confidence or "-"),
        ("Packages", package_count),
    ]
    if depth_classified:
        data += [("Direct", direct_count), ("Transitive", transitive_count)]
    else:
        data.append(("Depth", "unclassified"))
    print_summary_table("Sync Summary", data, show_if_empty=True)


def print_gap_report(kind: str, report: EnrichmentGapReport) -> None:
    """Print an enrichment gap report."""
    data = [
        ("Enriched", f"{report.enriched}/{report.total}"),
        ("Skipped", report.skipped),
        ("Failed", report.failed),
    ]
    data += [(f"Gap: {reason.value.replace('_', ' ')}", count) for reason, count in report.gaps.items()]
    print_summary_table(f"{kind.capitalize()} Enrichment", data)


def print_final_failure(message: str) -> None:
    console.print()
    console.rule("[bold red]FAILED[/bold red]", style="red")
    console.print(f"[bold red]{message}[/bold red]", justify="center")
    console.print()
