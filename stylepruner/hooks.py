"""Post-write hook for static-site generators.

`post_write` is the callable a host registers with its extension mechanism
(for instance a plugin's `on_post_build` or a build script step). It receives
the output root of the generated site and rewrites the pages found there.
"""

import logging
import os
from typing import Optional

from stylepruner.core.command_handler import CommandHandler
from stylepruner.core.services.site_rewriter import SiteRewriter
from stylepruner.domain.interfaces.user_interface import UserInterface
from stylepruner.domain.models.analysis import RewriteReport
from stylepruner.infrastructure.analysis.uncss_analyzer import UncssAnalyzer
from stylepruner.infrastructure.cli.display import ConsoleDisplay
from stylepruner.infrastructure.config import settings
from stylepruner.infrastructure.filesystem.local_fs import LocalFileSystem

logger = logging.getLogger(__name__)


def create_site_rewriter() -> SiteRewriter:
    """Builds a SiteRewriter wired to uncss and the local disk from settings."""
    analyzer = UncssAnalyzer(
        command=settings.get_uncss_command(),
        ignore_sheets=settings.get_ignore_sheets(),
        timeout=settings.get_uncss_timeout(),
    )
    return SiteRewriter(
        analyzer=analyzer,
        file_system=LocalFileSystem(),
        file_pattern=settings.get_file_pattern(),
        extraction_pattern=settings.get_extraction_pattern(),
        strict_exit_status=settings.get_strict_exit_status(),
        concurrency=settings.get_concurrency(),
        config_options=settings.get_uncss_options(),
    )


def create_command_handler(ui: Optional[UserInterface] = None) -> CommandHandler:
    return CommandHandler(site_rewriter=create_site_rewriter(), ui=ui or ConsoleDisplay())


def post_write(output_root: str, ui: Optional[UserInterface] = None) -> RewriteReport:
    """Runs once after the generator has written all output files.

    Args:
        output_root: The generated site's destination directory.
        ui: Where to report progress; defaults to a rich console on stderr.

    Returns:
        The report of the rewrite pass.

    Raises:
        FileNotFoundError: If `output_root` is not a directory.
    """
    if not os.path.isdir(output_root):
        raise FileNotFoundError(f"Output directory does not exist: {output_root}")
    logger.info(f"post_write hook fired for {output_root}")
    handler = create_command_handler(ui)
    handler.handle_post_write(output_root)
    return handler.last_report
