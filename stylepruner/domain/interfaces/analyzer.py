"""Interface for the external CSS usage analyzer.

Implementations run some tool against a serialized configuration file and a
list of target pages, and hand back whatever the tool printed.
"""

import abc
from pathlib import Path
from typing import List

from stylepruner.domain.models.analysis import AnalysisResult
from stylepruner.domain.models.common import FilePath


class CssAnalyzer(abc.ABC):
    """Abstract Base Class for CSS usage analyzers."""

    @abc.abstractmethod
    async def analyze(self, config_path: Path, targets: List[FilePath]) -> AnalysisResult:
        """Runs the analysis.

        Args:
            config_path: Path to the serialized uncssrc configuration.
            targets: Non-empty list of page paths or glob patterns. Globs are
                expanded by the tool, not by the caller.

        Returns:
            The exit status and captured output of the tool.

        Raises:
            ValueError: If `targets` is empty.
            AnalysisError: If the tool could not be started.
            AnalysisTimeoutError: If the tool exceeded its time limit.
        """
        pass
