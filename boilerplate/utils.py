"""Console helpers for the boilerplate command line.

Rich-based output used by the CLI and the parameter collector.  The
scaffolding engine itself never prints; everything user-facing goes through
these helpers.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

console = Console()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(
    data: dict[str, str], title: str = "Summary", out: Console | None = None
) -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
        out: Console to print to; defaults to the shared console.
    """
    out = out or console
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    out.print(table)
    out.print()


def print_file_tree(
    root: Path, files: Iterable[Path], title: str | None = None, out: Console | None = None
) -> None:
    """Print *files* as a tree relative to *root*."""
    out = out or console
    tree = Tree(f"[bold]{escape(str(title or root))}[/bold]")
    branches: dict[tuple[str, ...], Tree] = {(): tree}
    for path in sorted(files):
        parts = Path(path).relative_to(root).parts
        for depth in range(1, len(parts)):
            key = parts[:depth]
            if key not in branches:
                branches[key] = branches[parts[: depth - 1]].add(f"[blue]{escape(parts[depth - 1])}/[/blue]")
        branches[parts[:-1]].add(escape(parts[-1]))
    out.print(tree)


def print_success(message: str, out: Console | None = None) -> None:
    """Print a green success message."""
    (out or console).print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str, out: Console | None = None) -> None:
    """Print a red error message."""
    (out or console).print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)


def print_warning(message: str, out: Console | None = None) -> None:
    """Print a yellow warning message."""
    (out or console).print(f"[bold yellow]{escape(message)}[/bold yellow]")
