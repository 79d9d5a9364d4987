"""Rich console output for the pathish command line."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text


class ConsoleOutput:
    """Formats command results for the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize output.

        Args:
            console: Console to print to. Defaults to standard output.
        """
        self.console = console or Console()

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {message}")

    def show_entry(self, root: Path, entry: Path) -> None:
        """Show one walked entry, indented by its depth below the root.

        Args:
            root: Root of the walk.
            entry: Entry produced by the walk.
        """
        relative = entry.relative_to(root)
        depth = len(relative.parts)
        label = str(entry) if depth == 0 else relative.name
        self.console.print(Text("  " * depth + label))

    def show_info(self, path: Path, facts: dict[str, object]) -> None:
        """Display facts about a path as a table.

        Args:
            path: The inspected path.
            facts: Property name to value.
        """
        table = Table(title=str(path))
        table.add_column("Property", style="cyan")
        table.add_column("Value")
        for name, value in facts.items():
            table.add_row(name, str(value))
        self.console.print(table)
