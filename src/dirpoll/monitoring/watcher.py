"""
Polling directory watcher.

Snapshots a directory tree, then rescans it on an interval and publishes
add and change events for files whose modification time moved forward.
No operating system change notification API is used.
"""

import asyncio
import logging
import os
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Literal, overload

from rich.console import Console
from rich.table import Table

from dirpoll.config.settings import IgnoreRule, WatcherSettings, get_config
from dirpoll.core.interfaces import IFileSystem
from dirpoll.filesystem.listing_cache import DirectoryListingCache
from dirpoll.filesystem.local import LocalFileSystem
from dirpoll.models import (
    ErrorEvent,
    EventKind,
    PathNotFoundError,
    ReadyEvent,
    SequencingError,
    Snapshot,
    WatcherError,
)
from dirpoll.monitoring.event_channel import (
    AddHandler,
    ChangeHandler,
    ErrorHandler,
    EventChannel,
    ReadyHandler,
)
from dirpoll.monitoring.poll_timer import PollTimer
from dirpoll.monitoring.traverser import ScanStats, Traverser

logger = logging.getLogger(__name__)


class WatcherState(str, Enum):
    """Lifecycle state of a watcher."""

    UNINITIALIZED = "uninitialized"
    COLLECTING = "collecting"
    READY = "ready"
    STOPPED = "stopped"


class PollingWatcher:
    """
    Watches a directory tree by periodic rescans.

    Call ``collect()`` once to build the initial snapshot, then ``watch()``
    to keep rescanning every ``poll_interval_seconds``. At most one scan is
    in flight at a time; a tick that fires while a scan is still running is
    skipped, not queued.

    Errors follow one rule: when an ``error`` handler is subscribed they are
    published, otherwise fatal ones (missing root, ``watch()`` before
    ``collect()``) are raised and per-entry ones are logged.
    """

    def __init__(
        self,
        root: str | Path,
        config: WatcherSettings | None = None,
        *,
        ignore_rules: Iterable[IgnoreRule] | None = None,
        filesystem: IFileSystem | None = None,
        listing_cache: DirectoryListingCache | None = None,
    ):
        """
        Initialize the watcher.

        Args:
            root: Directory (or single file) to watch; made absolute
            config: Watcher settings, the global configuration if omitted
            ignore_rules: Extra ignore rules on top of the configured ones
            filesystem: Filesystem adapter, the local filesystem if omitted
            listing_cache: Listing cache to use; a private one if omitted
        """
        self.config = config if config is not None else get_config()
        self.filesystem = filesystem if filesystem is not None else LocalFileSystem()
        self.listing_cache = listing_cache if listing_cache is not None else DirectoryListingCache(self.filesystem)
        self.poll_interval = self.config.poll_interval_seconds
        self.suppress_initial_adds = self.config.suppress_initial_adds

        self._root = os.path.abspath(os.fspath(root))
        self._files: Snapshot = {}
        self._ignore_rules: list[IgnoreRule] = self.config.compiled_ignore_rules()
        if ignore_rules:
            self._ignore_rules.extend(ignore_rules)

        self._traverser = Traverser(self.filesystem, self.listing_cache, follow_symlinks=self.config.follow_symlinks)
        self._events = EventChannel()
        self._timer = PollTimer()

        # Scan state
        self._scan_lock = asyncio.Lock()
        self._scan_task: asyncio.Task | None = None
        self._last_scan: ScanStats | None = None
        self._ready = False
        self._busy = False
        self._stopped = False

    @property
    def root(self) -> str:
        return self._root

    @property
    def files(self) -> Snapshot:
        """The live snapshot; not a copy."""
        return self._files

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def ignore_rules(self) -> tuple[IgnoreRule, ...]:
        return tuple(self._ignore_rules)

    @property
    def last_scan(self) -> ScanStats | None:
        """Counters of the most recently finished scan."""
        return self._last_scan

    @property
    def is_watching(self) -> bool:
        """Whether a polling tick is currently scheduled."""
        return self._timer.armed

    @property
    def state(self) -> WatcherState:
        if self._stopped:
            return WatcherState.STOPPED
        if self._ready:
            return WatcherState.READY
        if self._busy:
            return WatcherState.COLLECTING
        return WatcherState.UNINITIALIZED

    @overload
    def on(self, kind: Literal[EventKind.READY, "ready"], handler: ReadyHandler) -> "PollingWatcher": ...

    @overload
    def on(self, kind: Literal[EventKind.ERROR, "error"], handler: ErrorHandler) -> "PollingWatcher": ...

    @overload
    def on(self, kind: Literal[EventKind.ADD, "add"], handler: AddHandler) -> "PollingWatcher": ...

    @overload
    def on(self, kind: Literal[EventKind.CHANGE, "change"], handler: ChangeHandler) -> "PollingWatcher": ...

    def on(self, kind: EventKind | str, handler: Callable[..., Any]) -> "PollingWatcher":
        """
        Subscribe a handler to an event kind.

        Handlers receive no argument for ``ready``, the error for ``error``,
        the Entry for ``add`` and a FileChange for ``change``.

        Returns:
            The watcher, for chaining
        """
        self._events.subscribe(kind, handler)
        return self

    def off(self, kind: EventKind | str, handler: Callable[..., Any]) -> bool:
        """Unsubscribe a handler; returns False if it was not subscribed."""
        return self._events.unsubscribe(kind, handler)

    async def collect(self) -> None:
        """
        Scan the whole tree once and mark the watcher ready.

        Files found are published as add events unless
        ``suppress_initial_adds`` is set. Waits for a poll scan that is
        already running.

        Raises:
            PathNotFoundError: If the root does not exist and no error
                handler is subscribed
        """
        async with self._scan_lock:
            self._busy = True
            try:
                await self._scan(suppress_adds=self.suppress_initial_adds)
            finally:
                self._busy = False

        self._ready = True
        logger.info("Collected %d files under %s", len(self._files), self._root)
        self._events.publish(ReadyEvent())

    def watch(self) -> None:
        """
        Start, or continue, periodic scanning.

        Must be called from a running event loop after ``collect()``. Each
        call cancels the pending tick, starts a scan unless one is running,
        and schedules the next call unless the watcher was stopped.

        Raises:
            SequencingError: If ``collect()`` has not completed and no error
                handler is subscribed
        """
        if not self._ready:
            self._emit_or_raise(SequencingError(path=self._root))
            return

        self._timer.cancel()

        if not self._busy:
            self._busy = True
            self._scan_task = asyncio.get_running_loop().create_task(self._poll_scan())

        if self._stopped:
            logger.debug("Watcher for %s stopped, not rescheduling", self._root)
            return

        self._timer.schedule(self.poll_interval, self.watch)

    def stop(self) -> None:
        """
        Request polling to cease.

        A scan already running completes, and a tick already scheduled still
        fires once; it only stops the next rescheduling.
        """
        if not self._stopped:
            logger.info("Stopping watcher for %s", self._root)
        self._stopped = True

    async def aclose(self) -> None:
        """Stop, drop the pending tick and wait for an in-flight scan."""
        self.stop()
        self._timer.cancel()
        if self._scan_task is not None and not self._scan_task.done():
            await self._scan_task

    async def _poll_scan(self) -> None:
        try:
            async with self._scan_lock:
                self._busy = True
                try:
                    await self._scan(suppress_adds=False)
                finally:
                    self._busy = False
        except WatcherError as e:
            logger.error("Polling scan of %s failed, stopping watcher: %s", self._root, e)
            self._timer.cancel()
            self.stop()

    async def _scan(self, suppress_adds: bool) -> ScanStats | None:
        if not await self.filesystem.exists(self._root):
            self._emit_or_raise(PathNotFoundError(self._root, operation="scan"))
            return None

        stats = await self._traverser.walk(
            self._root,
            self._files,
            self._ignore_rules,
            suppress_adds=suppress_adds,
            on_event=self._events.publish,
            on_error=self._report,
        )
        self._last_scan = stats
        logger.debug(
            "Scanned %s in %.3fs: %d files, %d added, %d changed, %d errors",
            self._root,
            stats.duration_seconds,
            stats.files,
            stats.added,
            stats.changed,
            stats.errors,
        )
        return stats

    def _emit_or_raise(self, error: WatcherError) -> None:
        if not self._events.has_subscribers(EventKind.ERROR):
            raise error
        self._events.publish(ErrorEvent(error))

    def _report(self, error: WatcherError) -> None:
        if self._events.has_subscribers(EventKind.ERROR):
            self._events.publish(ErrorEvent(error))
        else:
            logger.warning("Skipping entry during scan of %s: %s", self._root, error)

    def print(self, console: Console | None = None) -> None:
        """Dump every snapshot entry as a table (debugging aid)."""
        console = console or Console()
        table = Table(title=f"Snapshot of {self._root}", show_header=True)
        table.add_column("Path", style="cyan")
        table.add_column("Modified", style="white")
        table.add_column("Created", style="dim")

        for entry in self._files.values():
            table.add_row(entry.path, _format_ms(entry.modified), _format_ms(entry.created))

        console.print(table)


def _format_ms(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp / 1000, UTC).isoformat(timespec="milliseconds")
