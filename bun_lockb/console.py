"""Rich console utilities for bun-lockb.

stdout carries the rendered lockfile, so every human-facing message goes
through `err_console`, which writes to stderr.
"""

import os
from typing import Any, List, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

# Detect CI environments
IS_GITHUB_ACTIONS = os.getenv("GITHUB_ACTIONS") == "true"

custom_theme = Theme(
    {
        "error": "bold red",
        "success": "bold green",
    }
)

# Force colors ON in GitHub Actions (it supports ANSI colors but Rich may incorrectly disable them)
err_console = Console(
    theme=custom_theme,
    stderr=True,
    force_terminal=IS_GITHUB_ACTIONS or None,
    color_system="auto",
)


def print_error(message: str) -> None:
    """
    Report an error on stderr.

    In GitHub Actions the message is also emitted as an `::error::`
    annotation so it shows up in the job summary.
    """
    if IS_GITHUB_ACTIONS:
        print(f"::error::{message}")

    err_console.print(f"[error]Error:[/error] {escape(message)}", highlight=False, soft_wrap=True)


def print_success(message: str) -> None:
    """Print a success line on stderr."""
    err_console.print(f"[success]✓[/success] {escape(message)}", highlight=False, soft_wrap=True)


def print_summary_table(title: str, data: List[Tuple[str, Any]]) -> None:
    """
    Print a two-column summary table on stderr.

    Args:
        title: Table title
        data: List of (label, value) tuples
    """
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    for label, value in data:
        table.add_row(label, str(value))

    err_console.print(table)
