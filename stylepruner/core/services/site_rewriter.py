"""Rewrites inline style blocks of a generated site in place.

For every page under the output root, the region captured by the extraction
pattern is handed to the CSS analyzer together with the page itself, and the
trimmed result replaces that region. Pages are independent of each other: a
failure on one page is recorded and the pass moves on.
"""

import asyncio
import logging
import os
import re
from typing import Any, Mapping, Optional, Pattern

from stylepruner.domain.exceptions import AnalysisError
from stylepruner.domain.interfaces.analyzer import CssAnalyzer
from stylepruner.domain.interfaces.file_system import FileSystem
from stylepruner.domain.models.analysis import (
    AnalysisConfig,
    RewriteFailure,
    RewriteReport,
    RewriteTarget,
)
from stylepruner.domain.models.common import FilePath, GlobPattern, ReducedCss, StyleRegion
from stylepruner.infrastructure.analysis.config_serializer import serialized_config

logger = logging.getLogger(__name__)

STYLE_BLOCK_PATTERN = re.compile(r"<style>(.*)</style>", re.DOTALL)
DEFAULT_FILE_PATTERN = GlobPattern("**/*.html")


class SiteRewriter:
    """Finds output pages and strips unused CSS from their inline style blocks."""

    def __init__(
        self,
        analyzer: CssAnalyzer,
        file_system: FileSystem,
        file_pattern: str = DEFAULT_FILE_PATTERN,
        extraction_pattern: Pattern[str] = STYLE_BLOCK_PATTERN,
        strict_exit_status: bool = False,
        concurrency: int = 1,
        config_options: Optional[Mapping[str, Any]] = None,
    ):
        """Initializes the SiteRewriter.

        Args:
            analyzer: The CssAnalyzer that reduces each captured region.
            file_system: File system adapter used for discovery, reads and writes.
            file_pattern: Glob, relative to the output root, selecting pages.
            extraction_pattern: Compiled pattern with exactly one capture group.
            strict_exit_status: Treat a non-zero analyzer exit status as failure.
            concurrency: Maximum number of pages processed at the same time.
            config_options: Extra uncssrc options added to every analysis.
        """
        if extraction_pattern.groups != 1:
            raise ValueError(
                f"Extraction pattern must have exactly one capture group, got {extraction_pattern.groups}"
            )
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        self.analyzer = analyzer
        self.file_system = file_system
        self.file_pattern = GlobPattern(file_pattern)
        self.extraction_pattern = extraction_pattern
        self.strict_exit_status = strict_exit_status
        self.concurrency = concurrency
        self.config_options = dict(config_options or {})

    async def rewrite_site(self, root: str) -> RewriteReport:
        """Processes every matching page under `root`.

        Returns:
            A report listing rewritten, skipped and failed pages. Failed pages
            are left untouched on disk.
        """
        root = os.path.abspath(root)
        files = sorted(await self.file_system.find_files(FilePath(root), self.file_pattern))
        logger.info(f"Found {len(files)} file(s) matching '{self.file_pattern}' under {root}")

        report = RewriteReport()
        semaphore = asyncio.Semaphore(self.concurrency)

        async def process(path: FilePath) -> None:
            async with semaphore:
                try:
                    rewritten = await self.rewrite_file(root, path)
                except Exception as e:
                    logger.error(f"Failed to prune styles in {path}: {e}", exc_info=True)
                    report.failures.append(RewriteFailure(path=path, error=e))
                    return
            if rewritten:
                report.rewritten.append(path)
            else:
                report.skipped.append(path)

        if self.concurrency == 1:
            for path in files:
                await process(path)
        else:
            await asyncio.gather(*(process(path) for path in files))

        logger.info(
            f"Rewrite finished: {len(report.rewritten)} rewritten, "
            f"{len(report.skipped)} skipped, {len(report.failures)} failed"
        )
        return report

    def locate(self, path: FilePath, content: str) -> RewriteTarget:
        spans = [match.span(1) for match in self.extraction_pattern.finditer(content)]
        return RewriteTarget(path=path, content=content, spans=spans)

    async def rewrite_file(self, root: str, path: FilePath) -> bool:
        """Reduces the style regions of one page and overwrites it.

        Each matched region is analyzed on its own and substituted back at its
        own position; the delimiters around it are kept as found. Nothing is
        written unless every region was reduced.

        Returns:
            True if the page was rewritten, False if it had no style region.
        """
        content = await self.file_system.read_file(path)
        target = self.locate(path, content)
        if not target.spans:
            logger.debug(f"No style block in {path}, skipping")
            return False

        reduced = [await self.reduce_region(root, path, region) for region in target.regions()]
        await self.file_system.write_file(path, target.substitute(reduced))
        logger.info(f"Pruned {len(reduced)} style block(s) in {path}")
        return True

    async def reduce_region(self, root: str, path: FilePath, region: StyleRegion) -> ReducedCss:
        config = AnalysisConfig(root_path=os.path.abspath(root), raw_content=region, extra=self.config_options)
        with serialized_config(config) as config_path:
            result = await self.analyzer.analyze(config_path, [path])

        if not result.succeeded:
            if self.strict_exit_status:
                raise AnalysisError(
                    f"uncss exited with status {result.exit_status} for {path}",
                    partial_output=result.output,
                )
            logger.warning(f"uncss exited with status {result.exit_status} for {path}; using its output anyway")
        return ReducedCss(result.output.strip())
