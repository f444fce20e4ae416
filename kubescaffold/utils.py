"""Shared console helpers for kubescaffold.

Progress and outcome messages are printed with Rich.  Every helper writes to
the module-level :data:`console` unless it is handed another ``Console``
through ``out``; scaffolders pass their own so that a silenced or captured
console stays silent or captured.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

console = Console()


def _target(out: Console | None) -> Console:
    return out if out is not None else console


def print_success(message: str, *, out: Console | None = None) -> None:
    """Print a green success message."""
    _target(out).print(f"[bold green]{message}[/bold green]")


def print_warning(message: str, *, out: Console | None = None) -> None:
    """Print a yellow warning message."""
    _target(out).print(f"[bold yellow]{message}[/bold yellow]")


def print_summary_table(
    data: dict[str, str], title: str = "Summary", *, out: Console | None = None
) -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
        out: Console to print on; the module console when omitted.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    target = _target(out)
    target.print(table)
    target.print()
