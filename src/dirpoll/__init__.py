"""Polling directory watcher: snapshot a tree and report added and changed files."""

from dirpoll.config import WatcherSettings
from dirpoll.models import (
    BaseError,
    Entry,
    EventKind,
    FileChange,
    MetadataFetchError,
    PathNotFoundError,
    SequencingError,
    WatcherError,
)
from dirpoll.monitoring import PollingWatcher, WatcherState

__version__ = "0.1.0"

__all__ = [
    "PollingWatcher",
    "WatcherState",
    "WatcherSettings",
    "Entry",
    "FileChange",
    "EventKind",
    "BaseError",
    "WatcherError",
    "PathNotFoundError",
    "MetadataFetchError",
    "SequencingError",
]
