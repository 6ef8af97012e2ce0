"""Runs the external `uncss` tool as a child process.

The invocation is an argument vector, never a shell string, so page paths
containing quotes or spaces reach the tool untouched. Standard output and
standard error are captured together as one text blob.
"""

import asyncio
import logging
import os
import shutil
import signal
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from stylepruner.domain.exceptions import AnalysisError, AnalysisTimeoutError
from stylepruner.domain.interfaces.analyzer import CssAnalyzer
from stylepruner.domain.models.analysis import AnalysisResult
from stylepruner.domain.models.common import FilePath, ToolOutput

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = ("uncss",)
# Stylesheets uncss is told to ignore while priming the analysis
DEFAULT_IGNORE_SHEETS = ("https://cdnjs.cloudflare.com/ajax/libs/KaTeX/0.6.0/katex.min.css",)
IGNORE_SHEETS_FLAG = "-S"
UNCSSRC_FLAG = "--uncssrc"
VERSION_CHECK_TIMEOUT_S = 5
# Upper bound for collecting leftover output once the tool has been killed
KILL_GRACE_S = 2.0

_POSIX = os.name == "posix"


class UncssAnalyzer(CssAnalyzer):
    """CssAnalyzer backed by the uncss command line tool."""

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_COMMAND,
        ignore_sheets: Sequence[str] = DEFAULT_IGNORE_SHEETS,
        timeout: Optional[float] = None,
    ):
        """Initializes the analyzer.

        Args:
            command: Program and leading arguments, e.g. ["uncss"] or
                ["npx", "uncss"].
            ignore_sheets: Stylesheet references passed with `-S`.
            timeout: Seconds to wait for the tool; None waits indefinitely.
        """
        if not command:
            raise ValueError("uncss command must not be empty")
        self.command = list(command)
        self.ignore_sheets = list(ignore_sheets)
        self.timeout = timeout
        logger.info(
            f"UncssAnalyzer initialized: command={self.command}, "
            f"ignore_sheets={self.ignore_sheets}, timeout={self.timeout}"
        )

    def build_argv(self, config_path: Path, targets: List[FilePath]) -> List[str]:
        argv = list(self.command)
        if self.ignore_sheets:
            argv += [IGNORE_SHEETS_FLAG, ",".join(self.ignore_sheets)]
        argv += [UNCSSRC_FLAG, str(config_path)]
        argv += [str(t) for t in targets]
        return argv

    async def analyze(self, config_path: Path, targets: List[FilePath]) -> AnalysisResult:
        if not targets:
            raise ValueError("uncss needs at least one target page")

        argv = self.build_argv(config_path, targets)
        logger.debug(f"Running: {argv}")

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                # Own process group, so a timeout can also stop node started by npx
                start_new_session=_POSIX,
            )
        except OSError as e:
            # Tool missing, not executable, or the spawn itself failed
            logger.error(f"Could not start {self.command[0]}: {e}")
            raise AnalysisError(f"uncss failed to start ({self.command[0]})", cause=e) from e

        try:
            stdout, _ = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            partial = await _terminate(process)
            logger.error(f"{self.command[0]} timed out after {self.timeout}s for {targets}")
            raise AnalysisTimeoutError(self.timeout, _decode(partial))
        except BaseException as e:
            await _terminate(process)
            if not isinstance(e, Exception):
                # Cancellation and interpreter exit propagate unchanged
                raise
            raise AnalysisError("uncss failed", cause=e) from e

        output = _decode(stdout)
        if process.returncode != 0:
            logger.warning(f"{self.command[0]} exited with status {process.returncode} for {targets}")
        else:
            logger.debug(f"{self.command[0]} returned {len(output)} characters for {targets}")
        return AnalysisResult(exit_status=process.returncode, output=ToolOutput(output))

    def is_installed(self) -> bool:
        """Check if the configured uncss command can be run.

        Returns:
            True if `<command> --version` exits with status 0, False otherwise
        """
        program, rest = self.command[0], self.command[1:]
        candidates = [program]
        if _windows() and not program.lower().endswith(".cmd"):
            # npm installs a .cmd shim on Windows
            candidates.append(f"{program}.cmd")

        for candidate in candidates:
            if shutil.which(candidate) is None:
                logger.debug(f"{candidate} not found in PATH")
                continue
            try:
                result = subprocess.run(
                    [candidate, *rest, "--version"],
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    text=True,
                    timeout=VERSION_CHECK_TIMEOUT_S,
                )
            except subprocess.TimeoutExpired:
                logger.warning(f"Timeout checking if {candidate} is installed")
                continue
            except OSError as e:
                logger.debug(f"Could not run {candidate}: {e}")
                continue
            logger.debug(f"{candidate} --version returned {result.returncode}: {result.stdout.strip()}")
            if result.returncode == 0:
                self.command[0] = candidate
                return True

        logger.info(f"{program} is not installed or not found in PATH")
        return False


def _decode(data: Optional[bytes]) -> str:
    return (data or b"").decode("utf-8", errors="replace")


def _windows() -> bool:
    return sys.platform == "win32"


async def _terminate(process: asyncio.subprocess.Process) -> bytes:
    """Kills the tool and everything it started, returning any output left in the pipe.

    Gives up on the pipe after KILL_GRACE_S and returns what is known so far.
    """
    try:
        if _POSIX:
            os.killpg(process.pid, signal.SIGKILL)
        elif process.returncode is None:
            process.kill()
    except ProcessLookupError:
        pass

    try:
        partial, _ = await asyncio.wait_for(process.communicate(), timeout=KILL_GRACE_S)
    except asyncio.TimeoutError:
        logger.warning(f"Output of killed process {process.pid} did not close within {KILL_GRACE_S}s")
        return b""
    return partial or b""
