import logging
from typing import Any

from rich.console import Console
from rich.table import Table

from stylepruner.domain.interfaces.user_interface import UserInterface
from stylepruner.domain.models.analysis import RewriteReport

logger = logging.getLogger(__name__)


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Console = None):
        self._console = console or Console(stderr=True)

    @property
    def console(self) -> Console:
        """Get the Rich console instance for direct operations."""
        return self._console

    @console.setter
    def console(self, value: Console) -> None:
        self._console = value

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        self.console.print(f"[blue]Info:[/blue] {info_message}")

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        self.console.print(f"[bold red]Error:[/bold red] {error_message}")

    def display_summary(self, report: RewriteReport) -> None:
        """Renders rewritten/skipped/failed counts as a table."""
        table = Table(title="stylepruner", show_header=True, header_style="bold")
        table.add_column("Outcome")
        table.add_column("Files", justify="right")
        table.add_row("[green]rewritten[/green]", str(len(report.rewritten)))
        table.add_row("[dim]skipped[/dim]", str(len(report.skipped)))
        failed_style = "red" if report.failures else "dim"
        table.add_row(f"[{failed_style}]failed[/{failed_style}]", str(len(report.failures)))
        self.console.print(table)
        logger.debug(f"Displayed summary for {report.total} files")
