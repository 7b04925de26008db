"""Terminal output handling using Rich library.

This module provides the OutputHandler class for the CLI's status messages.
Messages go to stderr so that markdown written to stdout can be piped.
Supports verbosity levels and the --no-color flag.
"""

from rich.console import Console

from .models import ConversionSummary


class OutputHandler:
    """Handles all terminal status output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console writing to stderr

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Conversion completed")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            stderr=True,
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    def print_summary(self, summary: ConversionSummary) -> None:
        """Display conversion summary.

        Args:
            summary: Result of the conversion
        """
        self.console.print("\n[bold]Conversion Summary:[/bold]")
        self.console.print(f"  Input: {summary.input_path}")
        self.console.print(f"  Output: {summary.output_path or 'stdout'}")
        self.console.print(f"  Characters: {summary.characters}")

        if summary.annotations > 0:
            self.console.print(f"  [blue]◆[/blue] Annotated nodes: {summary.annotations}")
        else:
            self.console.print("  [dim]─[/dim] No annotations needed")

        if not summary.lookups_enabled:
            self.console.print("  [dim]Page titles were not looked up[/dim]")
