"""Rich console output for the CLI."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from fs_kit.types import DirectoryEntry, EntryKind

_KIND_STYLES = {
    EntryKind.DIRECTORY: "bold blue",
    EntryKind.FILE: "",
    EntryKind.OTHER: "magenta",
    EntryKind.UNKNOWN: "dim red",
}


class ConsoleUI:
    """Non-interactive console output."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_names(self, names: list[str]) -> None:
        """Print entry names one per line."""
        for name in names:
            style = "bold blue" if name.endswith("/") else None
            self.console.print(name, style=style, markup=False, highlight=False)

    def show_entries(self, entries: list[DirectoryEntry], title: str) -> None:
        """Display entries with their metadata.

        Args:
            entries: Entries to display.
            title: Table title.
        """
        if not entries:
            self.console.print("[dim]Directory is empty.[/dim]")
            return

        table = Table(title=title)
        table.add_column("Name", style="cyan")
        table.add_column("Kind")
        table.add_column("Exec")

        for entry in entries:
            style = _KIND_STYLES[entry.kind]
            kind = f"[{style}]{entry.kind.value}[/]" if style else entry.kind.value
            if entry.executable is None:
                executable = ""
            else:
                executable = "yes" if entry.executable else "no"
            table.add_row(entry.name, kind, executable)

        self.console.print(table)

    def show_success(self, message: str) -> None:
        """Show success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        """Show error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def show_warning(self, message: str) -> None:
        """Show warning message."""
        self.console.print(f"[yellow]![/yellow] {message}")

    def show_info(self, message: str) -> None:
        """Show info message."""
        self.console.print(f"[blue]i[/blue] {message}")
