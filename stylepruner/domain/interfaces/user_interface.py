"""Interface for reporting progress and results to the user.

Defines the contract for displaying information, warnings, errors and the
final summary of a rewrite pass.
"""

import abc
from typing import Any

from stylepruner.domain.models.analysis import RewriteReport


class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user."""
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user.

        Args:
            error_message: The error message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_summary(self, report: RewriteReport) -> None:
        """Displays the outcome of a rewrite pass."""
        pass
