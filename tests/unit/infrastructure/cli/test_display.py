from unittest.mock import MagicMock

import pytest
from rich.table import Table

from stylepruner.domain.models.analysis import RewriteFailure, RewriteReport
from stylepruner.domain.models.common import FilePath
from stylepruner.infrastructure.cli.display import ConsoleDisplay


@pytest.fixture
def mock_console():
    """Fixture to create a mock rich Console object."""
    return MagicMock()


@pytest.fixture
def console_display(mock_console: MagicMock):
    """Fixture to create a ConsoleDisplay instance with a mocked console."""
    display = ConsoleDisplay()
    display.console = mock_console  # Inject the mock
    return display


def test_display_error(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_error("Could not prune /site/index.html")
    mock_console.print.assert_called_once_with("[bold red]Error:[/bold red] Could not prune /site/index.html")


def test_display_info(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_info("Pruning unused CSS")
    mock_console.print.assert_called_once_with("[blue]Info:[/blue] Pruning unused CSS")


def test_display_summary_prints_a_table(console_display: ConsoleDisplay, mock_console: MagicMock):
    report = RewriteReport(
        rewritten=[FilePath("a.html"), FilePath("b.html")],
        skipped=[FilePath("c.html")],
        failures=[RewriteFailure(FilePath("d.html"), OSError("denied"))],
    )

    console_display.display_summary(report)

    mock_console.print.assert_called_once()
    (table,), _ = mock_console.print.call_args
    assert isinstance(table, Table)
    assert table.row_count == 3
