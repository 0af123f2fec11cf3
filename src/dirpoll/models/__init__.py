"""Data models, events and exceptions for the watcher."""

from dirpoll.models.entry import Entry, FileChange, FileMetadata, PathKind, Snapshot
from dirpoll.models.events import AddEvent, ChangeEvent, ErrorEvent, EventKind, ReadyEvent, WatcherEvent
from dirpoll.models.exceptions import (
    BaseError,
    ConfigurationError,
    MetadataFetchError,
    PathNotFoundError,
    SequencingError,
    WatcherError,
)

__all__ = [
    "Entry",
    "FileChange",
    "FileMetadata",
    "PathKind",
    "Snapshot",
    "EventKind",
    "ReadyEvent",
    "ErrorEvent",
    "AddEvent",
    "ChangeEvent",
    "WatcherEvent",
    "BaseError",
    "ConfigurationError",
    "WatcherError",
    "PathNotFoundError",
    "MetadataFetchError",
    "SequencingError",
]
