"""Concrete implementation of the FileSystem interface for the local disk.

Uses `pathlib` and `glob` for discovery and `aiofiles` for async I/O.
"""

import asyncio
import glob
import logging
import os
from pathlib import Path
from typing import List

import aiofiles

from stylepruner.domain.interfaces.file_system import FileSystem
from stylepruner.domain.models.common import FileContent, FilePath, GlobPattern

logger = logging.getLogger(__name__)


class LocalFileSystem(FileSystem):
    """Implementation of FileSystem for the local disk."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding
        logger.debug(f"LocalFileSystem initialized (encoding={encoding}).")

    async def read_file(self, path: FilePath) -> FileContent:
        """Reads file content asynchronously.

        Newlines are preserved as stored so an unchanged region round-trips
        byte for byte.
        """
        logger.debug(f"Reading file: {path}")
        try:
            async with aiofiles.open(path, mode="r", encoding=self.encoding, newline="") as f:
                content = await f.read()
        except OSError as e:
            logger.error(f"Error reading file {path}: {e}")
            raise
        logger.debug(f"Read {len(content)} characters from {path}")
        return FileContent(content)

    async def write_file(self, path: FilePath, content: FileContent) -> None:
        """Overwrites the file in place, truncating the previous content."""
        logger.debug(f"Writing {len(content)} characters to {path}")
        try:
            async with aiofiles.open(path, mode="w", encoding=self.encoding, newline="") as f:
                await f.write(content)
        except OSError as e:
            logger.error(f"Error writing file {path}: {e}")
            raise
        logger.debug(f"Successfully wrote to {path}")

    async def find_files(self, root: FilePath, pattern: GlobPattern) -> List[FilePath]:
        """Finds files under `root` using a recursive glob pattern."""
        query = os.path.join(glob.escape(str(root)), pattern)
        logger.debug(f"Searching for files matching glob pattern: {query}")
        # Run synchronous glob in a thread to avoid blocking the event loop
        matched_paths = await asyncio.to_thread(glob.glob, query, recursive=True)
        result = [FilePath(p) for p in matched_paths if Path(p).is_file()]
        logger.debug(f"Found {len(result)} files matching '{query}'")
        return result
