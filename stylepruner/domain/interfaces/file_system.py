import abc
from typing import List

from stylepruner.domain.models.common import FileContent, FilePath, GlobPattern


class FileSystem(abc.ABC):
    """Interface for file system operations."""

    @abc.abstractmethod
    async def read_file(self, path: FilePath) -> FileContent:
        """Reads the content of a file.

        Args:
            path: The path to the file.

        Returns:
            The content of the file.

        Raises:
            FileNotFoundError: If the file does not exist.
            PermissionError: If the user lacks permission to read the file.
        """
        pass

    @abc.abstractmethod
    async def write_file(self, path: FilePath, content: FileContent) -> None:
        """Overwrites a file with new content, truncating what was there.

        Raises:
            PermissionError: If the user lacks permission to write the file.
        """
        pass

    @abc.abstractmethod
    async def find_files(self, root: FilePath, pattern: GlobPattern) -> List[FilePath]:
        """Finds files under `root` matching a glob pattern.

        Args:
            root: Directory to search from.
            pattern: A glob pattern; `**` matches recursively.

        Returns:
            A list of file paths matching the pattern. Directories are excluded.
        """
        pass
