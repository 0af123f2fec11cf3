"""
Recursive traversal and snapshot diffing.

Walks a directory tree through the listing cache, classifies every file it
finds as new, changed or unchanged against the snapshot, and writes the
current observation back into the snapshot.
"""

import logging
import os
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from dirpoll.config.settings import IgnoreRule
from dirpoll.core.interfaces import IFileSystem
from dirpoll.filesystem.listing_cache import DirectoryListingCache
from dirpoll.models import (
    AddEvent,
    ChangeEvent,
    Entry,
    FileChange,
    FileMetadata,
    Snapshot,
    WatcherError,
    WatcherEvent,
)
from dirpoll.models.exceptions import classify_os_error

logger = logging.getLogger(__name__)


@dataclass
class ScanStats:
    """Counters collected during one scan."""

    directories: int = 0
    files: int = 0
    added: int = 0
    changed: int = 0
    ignored: int = 0
    errors: int = 0
    duration_seconds: float = 0.0


@dataclass
class _Scan:
    snapshot: Snapshot
    ignore_rules: Sequence[IgnoreRule]
    suppress_adds: bool
    on_event: Callable[[WatcherEvent], Any]
    on_error: Callable[[WatcherError], Any]
    stats: ScanStats = field(default_factory=ScanStats)

    def report(self, error: WatcherError) -> None:
        self.stats.errors += 1
        self.on_error(error)


def matches_ignore_rule(name: str, parent: str, rules: Sequence[IgnoreRule]) -> bool:
    """
    Check a candidate against ignore rules.

    String rules match as literal substrings, compiled patterns are searched.
    Both the base name and the containing directory path are tested.
    """
    for rule in rules:
        if isinstance(rule, str):
            if rule in name or rule in parent:
                return True
        elif rule.search(name) or rule.search(parent):
            return True
    return False


def is_valid_name(name: str) -> bool:
    """Reject names that cannot be a single child of a directory."""
    if not name or name in (".", ".."):
        return False
    if "\x00" in name or os.sep in name:
        return False
    return not (os.altsep and os.altsep in name)


class Traverser:
    """
    Walks a tree and diffs it against a snapshot.

    Siblings are processed one at a time and subdirectories are entered
    sequentially, so at most one filesystem call is outstanding per scan.
    """

    def __init__(self, filesystem: IFileSystem, listing_cache: DirectoryListingCache, follow_symlinks: bool = False):
        self.filesystem = filesystem
        self.listing_cache = listing_cache
        self.follow_symlinks = follow_symlinks

    async def walk(
        self,
        path: str,
        snapshot: Snapshot,
        ignore_rules: Sequence[IgnoreRule],
        *,
        suppress_adds: bool = False,
        on_event: Callable[[WatcherEvent], Any],
        on_error: Callable[[WatcherError], Any],
    ) -> ScanStats:
        """
        Scan ``path`` recursively, updating ``snapshot`` in place.

        Per-entry failures never abort the walk: they are passed to
        ``on_error`` and the remaining siblings are still processed.

        Args:
            path: Absolute directory (or single file) to scan
            snapshot: Mapping of absolute file path to last seen Entry
            ignore_rules: Rules excluding names or parent paths
            suppress_adds: Do not publish add events for new paths
            on_event: Receives AddEvent and ChangeEvent instances
            on_error: Receives non-fatal errors

        Returns:
            Counters describing the scan
        """
        scan = _Scan(
            snapshot=snapshot,
            ignore_rules=ignore_rules,
            suppress_adds=suppress_adds,
            on_event=on_event,
            on_error=on_error,
        )
        started = time.perf_counter()
        await self._walk_directory(path, scan)
        scan.stats.duration_seconds = time.perf_counter() - started
        return scan.stats

    async def _walk_directory(self, path: str, scan: _Scan) -> None:
        try:
            record = await self.listing_cache.list(path)
        except OSError as e:
            scan.report(classify_os_error(path, "list_dir", e))
            return

        if not record.is_directory:
            # Watching a single file
            await self._visit(path, scan)
            return

        scan.stats.directories += 1
        for name in record.names:
            if not is_valid_name(name):
                logger.debug("Skipping unusable name %r in %s", name, path)
                continue

            if matches_ignore_rule(name, path, scan.ignore_rules):
                scan.stats.ignored += 1
                continue

            await self._visit(os.path.join(path, name), scan)

    async def _visit(self, path: str, scan: _Scan) -> None:
        try:
            metadata = await self.filesystem.stat(path)
        except OSError as e:
            scan.report(classify_os_error(path, "stat", e))
            return

        if metadata.is_directory:
            if metadata.is_symlink and not self.follow_symlinks:
                logger.debug("Not following symlinked directory %s", path)
                return
            await self._walk_directory(path, scan)
        elif metadata.is_file:
            self._diff(path, metadata, scan)

    def _diff(self, path: str, metadata: FileMetadata, scan: _Scan) -> None:
        entry = Entry.from_metadata(path, metadata)
        previous = scan.snapshot.get(path)
        scan.stats.files += 1

        if previous is None:
            scan.stats.added += 1
            if not scan.suppress_adds:
                logger.debug("New file %s", path)
                scan.on_event(AddEvent(entry))
        elif entry.modified > previous.modified:
            scan.stats.changed += 1
            logger.debug("Changed file %s (%d -> %d)", path, previous.modified, entry.modified)
            scan.on_event(ChangeEvent(FileChange(updated=entry, previous=previous)))

        scan.snapshot[path] = entry
