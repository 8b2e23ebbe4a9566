"""Console output helpers shared by the CLI commands."""
from __future__ import annotations

from typing import Any, List, Optional

from rich.console import Console
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    err_console.print(f"[red]✗[/red] {message}")


def print_info(message: str) -> None:
    console.print(f"[blue]i[/blue] {message}")


def print_table(headers: List[str], rows: List[List[Any]], title: Optional[str] = None) -> None:
    """Print ``rows`` as a table with one column per header."""

    table = Table(title=title)
    for header in headers:
        table.add_column(header)
    for row in rows:
        table.add_row(*[str(cell) for cell in row])
    console.print(table)


__all__ = [
    "console",
    "err_console",
    "print_success",
    "print_error",
    "print_info",
    "print_table",
]
