"""Terminal output handling using the Rich library.

OutputHandler renders every user-facing message of the CLI: colored status
lines, a spinner and progress bar for pushes, and the run summaries.
Supports verbosity levels and the --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)
from rich.spinner import Spinner

from .models import DryRunReport, PushSummary


class OutputHandler:
    """Handles all terminal output using Rich.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Pushed guides/intro")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        self.verbosity = verbosity
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print(self, message: str) -> None:
        self.console.print(message)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display a spinner while a single operation runs."""
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10):
            yield

    @contextmanager
    def progress_bar(self, total: int, description: str = "Pushing") -> Iterator[Progress]:
        """Display a progress bar for multi-item pushes.

        Example:
            >>> with handler.progress_bar(3, "Pushing") as progress:
            ...     task = progress.add_task("Pushing", total=3)
            ...     progress.update(task, advance=1)
        """
        progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=self.console,
            transient=True,
        )
        with progress:
            yield progress

    def print_push_summary(self, summary: PushSummary) -> None:
        """Display the push summary with color coding."""
        self.console.print("\n[bold]Push Summary:[/bold]")

        if summary.created:
            self.console.print(f"  [green]+[/green] Created: {len(summary.created)} article(s)")

        if summary.updated:
            self.console.print(f"  [green]↑[/green] Updated: {len(summary.updated)} article(s)")

        if summary.skipped:
            self.console.print(f"  [dim]─[/dim] In sync: {len(summary.skipped)} article(s)")

        if summary.failed:
            self.console.print(f"  [red]✗[/red] Failed: {len(summary.failed)} article(s)")
            for content_id, message in summary.failed:
                self.console.print(f"    • {escape(content_id)}: {escape(message)}")

        if summary.total == 0:
            self.console.print("\n[yellow]No content to push[/yellow]")
        elif summary.failed:
            self.console.print("\n[red]Push completed with errors[/red]")
        elif not summary.created and not summary.updated:
            self.console.print("\n[green]Already in sync. Nothing to push.[/green]")
        else:
            self.console.print("\n[green]Push completed successfully[/green]")

    def print_dryrun_summary(self, report: DryRunReport) -> None:
        """Display the dry run preview."""
        self.console.print("\n[bold]Dry Run - Changes Preview:[/bold]")

        if report.to_push:
            self.console.print(f"\n[green]Would push ({len(report.to_push)} article(s)):[/green]")
            for content_id in report.to_push:
                self.console.print(f"  • {escape(content_id)}")

        if report.missing:
            self.console.print(f"\n[red]Not found ({len(report.missing)} item(s)):[/red]")
            for content_id in report.missing:
                self.console.print(f"  • {escape(content_id)}")

        if not report.to_push and not report.missing:
            self.console.print("\n[green]Already in sync. No changes to apply.[/green]")
        elif report.in_sync:
            self.console.print(f"\n[dim]{len(report.in_sync)} article(s) already in sync[/dim]")
