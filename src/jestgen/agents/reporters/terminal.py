"""Terminal reporter with rich output formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from jestgen.models.scaffold import ScaffoldResult

console = Console()

_ACTION_STYLES = {
    "created": "green",
    "updated": "cyan",
    "appended": "blue",
}


class CLIReporter:
    """Rich terminal output for scaffold results."""

    def __init__(self, target: Console | None = None) -> None:
        self.console = target or console

    def print_header(self, title: str) -> None:
        """Print a bold header."""
        self.console.print(f"\n[bold cyan]{title}[/bold cyan]\n")

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    def print_info(self, message: str) -> None:
        """Print an info message."""
        self.console.print(f"[dim]{message}[/dim]")

    def print_scaffold_result(self, result: ScaffoldResult) -> None:
        """Summarize one scaffold invocation."""
        style = _ACTION_STYLES.get(result.action.value, "white")
        self.print_success(
            f"[{style}]{result.action.value.capitalize()}[/{style}] test case for "
            f"[bold]{result.function_name}[/bold] in {result.artifact_path}"
        )
        for warning in result.warnings:
            self.print_warning(warning)


reporter = CLIReporter()
