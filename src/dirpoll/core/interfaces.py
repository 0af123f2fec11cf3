"""
Abstract interfaces for the watcher's collaborators.

The scan logic only talks to the filesystem through ``IFileSystem``, so an
alternative backend (a native recursive iterator, an in-memory tree for
tests) can be swapped in without touching the diff algorithm.
"""

from abc import ABC, abstractmethod

from dirpoll.models import FileMetadata


class IFileSystem(ABC):
    """Interface for the filesystem primitives a scan needs."""

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """
        Check whether a path exists.

        Args:
            path: Absolute path to check

        Returns:
            True if the path exists
        """
        pass

    @abstractmethod
    async def list_dir(self, path: str) -> list[str]:
        """
        List the immediate child names of a directory.

        Args:
            path: Absolute directory path

        Returns:
            Child base names, sorted

        Raises:
            OSError: If the directory cannot be read
        """
        pass

    @abstractmethod
    async def stat(self, path: str) -> FileMetadata:
        """
        Fetch metadata for a path.

        Args:
            path: Absolute path to inspect

        Returns:
            Metadata with timestamps, size and classification

        Raises:
            OSError: If the path cannot be inspected
        """
        pass
