"""Shared console helpers for FastAPI Initializr.

All user-facing output goes through the module-level Rich ``console``.
Library code never prints; only the CLI calls these helpers.
"""

from __future__ import annotations

from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table
from rich.tree import Tree

from initializr.catalog import DependencyEntry

console = Console()


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_size(num_bytes: int) -> str:
    """Format a byte count to a human-readable string.

    Examples::

        format_size(512)     -> "512 B"
        format_size(2048)    -> "2.0 KB"
        format_size(3145728) -> "3.0 MB"
    """
    if num_bytes < 1024:
        return f"{max(num_bytes, 0)} B"
    size = float(num_bytes)
    for unit in ("KB", "MB", "GB"):
        size /= 1024
        if size < 1024 or unit == "GB":
            break
    return f"{size:.1f} {unit}"


def build_file_tree(root: str, paths: Iterable[str]) -> Tree:
    """Build a Rich tree of *paths* (POSIX, relative) under *root*.

    Directories are created on first use; insertion order is preserved.
    """
    tree = Tree(f"[bold blue]{root}/[/bold blue]")
    nodes: dict[str, Tree] = {}
    for path in paths:
        parent = tree
        parts = path.split("/")
        for depth, part in enumerate(parts[:-1]):
            key = "/".join(parts[: depth + 1])
            if key not in nodes:
                nodes[key] = parent.add(f"[bold]{part}/[/bold]")
            parent = nodes[key]
        parent.add(escape(parts[-1]))
    return tree


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, escape(str(value)))

    console.print(table)
    console.print()


def print_dependency_table(
    entries: Iterable[DependencyEntry],
    title: str = "Dependencies",
    locked: Iterable[str] = (),
) -> None:
    """Print catalog entries, marking ids that are locked on."""
    locked_ids = set(locked)
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Id", no_wrap=True)
    table.add_column("Package", style="green")
    table.add_column("Category", style="dim")
    table.add_column("Description")

    for entry in entries:
        dep_id = f"{entry.id} [yellow](locked)[/yellow]" if entry.id in locked_ids else entry.id
        table.add_row(dep_id, escape(entry.package), entry.category, escape(entry.description))

    console.print(table)
    console.print()


def print_file_tree(root: str, paths: Iterable[str]) -> None:
    """Print the generated project tree."""
    console.print(build_file_tree(root, paths))
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def create_progress() -> Progress:
    """Create a Rich progress spinner for generation runs.

    Returns:
        A ``Progress`` instance suitable for use as a context manager.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
