"""
Directory listing cache.

Re-reading every directory on every poll is the expensive part of a scan.
The cache keeps the last listing of each directory together with the
directory's modification time and only lists it again once that time moves.
"""

import logging
from dataclasses import dataclass, field

from dirpoll.core.interfaces import IFileSystem

logger = logging.getLogger(__name__)


@dataclass
class ListingRecord:
    """Cached listing of one path."""

    path: str
    names: list[str] = field(default_factory=list)
    size: int = 0
    modified_ns: int = 0
    is_directory: bool = False


class DirectoryListingCache:
    """
    Cache of directory listings keyed by absolute path.

    Records are never evicted on their own; a long running watch keeps one
    record per directory it ever visited. Use ``invalidate`` to drop them.
    """

    def __init__(self, filesystem: IFileSystem):
        """
        Initialize the cache.

        Args:
            filesystem: Adapter used to stat and list paths
        """
        self.filesystem = filesystem
        self._records: dict[str, ListingRecord] = {}
        self.hits = 0
        self.misses = 0

    async def list(self, path: str) -> ListingRecord:
        """
        Get the listing of ``path``, re-reading it only if it changed.

        A path that is not a directory gets a record with no names.

        Args:
            path: Absolute path to list

        Returns:
            The cached or refreshed listing record

        Raises:
            OSError: If the path cannot be inspected or listed
        """
        metadata = await self.filesystem.stat(path)
        record = self._records.get(path)

        if record is None:
            self.misses += 1
            names = await self.filesystem.list_dir(path) if metadata.is_directory else []
            record = ListingRecord(
                path=path,
                names=names,
                size=metadata.size,
                modified_ns=metadata.modified_ns,
                is_directory=metadata.is_directory,
            )
            self._records[path] = record
            return record

        if record.is_directory != metadata.is_directory:
            logger.debug("Path %s changed type, relisting", path)
            self.misses += 1
            record.names = await self.filesystem.list_dir(path) if metadata.is_directory else []
            record.is_directory = metadata.is_directory
            record.size = metadata.size
            record.modified_ns = metadata.modified_ns
        elif record.is_directory and record.modified_ns != metadata.modified_ns:
            logger.debug("Directory %s modified, relisting", path)
            self.misses += 1
            record.names = await self.filesystem.list_dir(path)
            record.size = metadata.size
            record.modified_ns = metadata.modified_ns
        else:
            self.hits += 1

        return record

    def invalidate(self, path: str | None = None) -> None:
        """Drop the record for ``path``, or every record when no path is given."""
        if path is None:
            self._records.clear()
        else:
            self._records.pop(path, None)

    def __contains__(self, path: object) -> bool:
        return path in self._records

    def __len__(self) -> int:
        return len(self._records)
