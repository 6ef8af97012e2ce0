"""Command Handler: Orchestrates the post-write command.

Receives the output root from the entry point (main.py or the hook), delegates
the work to the SiteRewriter and reports the outcome through the UI.
"""

import asyncio
import logging
import os
from typing import Optional

from stylepruner.core.services.site_rewriter import SiteRewriter
from stylepruner.domain.interfaces.user_interface import UserInterface
from stylepruner.domain.models.analysis import RewriteReport

logger = logging.getLogger(__name__)


class CommandHandler:
    """Handles incoming commands and delegates to the rewriter."""

    def __init__(self, site_rewriter: SiteRewriter, ui: UserInterface):
        self.site_rewriter = site_rewriter
        self.ui = ui
        self.last_report: Optional[RewriteReport] = None

    def handle_post_write(self, output_root: str) -> bool:
        """Prunes the inline styles of every page below `output_root`.

        Returns:
            True if every page was processed, False if the root is missing or
            any page failed.
        """
        if not os.path.isdir(output_root):
            logger.error(f"Output directory does not exist: {output_root}")
            self.ui.display_error(f"Output directory does not exist: {output_root}")
            return False

        self.ui.display_info(f"Pruning unused CSS under {output_root}...")
        report = asyncio.run(self.site_rewriter.rewrite_site(output_root))
        self.last_report = report

        for failure in report.failures:
            self.ui.display_error(f"Could not prune {failure.describe()}")
        self.ui.display_summary(report)
        return report.ok
