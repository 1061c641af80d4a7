"""Rich console utilities for nodejs-schedule.

Provides the shared Rich Console instance and the renderers the CLI uses
to print schedule entries.
"""

import os
from datetime import date
from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from .models import ScheduleEntry

# Detect CI environments
IS_GITHUB_ACTIONS = os.getenv("GITHUB_ACTIONS") == "true"

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "version": "bold magenta",
        "muted": "dim",
    }
)

# Shared console instance
console = Console(
    theme=custom_theme,
    force_terminal=IS_GITHUB_ACTIONS or None,
    color_system="auto",
)

err_console = Console(theme=custom_theme, stderr=True)


def _format_date(value: Optional[date]) -> str:
    return value.isoformat() if value is not None else "-"


def print_schedule_table(entries: Iterable[ScheduleEntry], title: str = "Node.js Release Schedule") -> None:
    """
    Print release lines as a table, in the order given.

    Args:
        entries: Schedule entries to list
        title: Table title
    """
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Version", style="version")
    table.add_column("Start")
    table.add_column("LTS")
    table.add_column("Maintenance")
    table.add_column("End")
    table.add_column("Codename", style="muted")

    for entry in entries:
        table.add_row(
            entry.version,
            _format_date(entry.start),
            _format_date(entry.lts),
            _format_date(entry.maintenance),
            _format_date(entry.end),
            entry.codename or "",
        )

    console.print(table)


def print_entry_details(entry: ScheduleEntry) -> None:
    """Print every schedule field of one release line."""
    table = Table(title=f"Node.js {entry.version}", show_header=True, header_style="bold")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Version", entry.version)
    table.add_row("Start", _format_date(entry.start))
    table.add_row("LTS", _format_date(entry.lts))
    table.add_row("Maintenance", _format_date(entry.maintenance))
    table.add_row("End", _format_date(entry.end))
    if entry.codename:
        table.add_row("Codename", entry.codename)

    console.print(table)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[error]Error:[/error] {escape(message)}", highlight=False, soft_wrap=True)
