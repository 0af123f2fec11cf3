"""
Event types published by a watcher.

Each event kind has its own frozen dataclass carrying only the payload that
kind needs; ``WatcherEvent`` is the union of all of them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from dirpoll.models.entry import Entry, FileChange
from dirpoll.models.exceptions import BaseError


class EventKind(str, Enum):
    """Event kinds a watcher can publish."""

    READY = "ready"
    ERROR = "error"
    ADD = "add"
    CHANGE = "change"


@dataclass(frozen=True)
class ReadyEvent:
    """Published once a collect() scan and its events have been dispatched."""

    kind: ClassVar[EventKind] = EventKind.READY

    def payload(self) -> tuple:
        return ()


@dataclass(frozen=True)
class ErrorEvent:
    """Published for fatal or per-entry failures when an error handler exists."""

    error: BaseError
    kind: ClassVar[EventKind] = EventKind.ERROR

    def payload(self) -> tuple:
        return (self.error,)


@dataclass(frozen=True)
class AddEvent:
    """Published when a file path is seen for the first time."""

    entry: Entry
    kind: ClassVar[EventKind] = EventKind.ADD

    def payload(self) -> tuple:
        return (self.entry,)


@dataclass(frozen=True)
class ChangeEvent:
    """Published when a known file's modification time moved forward."""

    change: FileChange
    kind: ClassVar[EventKind] = EventKind.CHANGE

    def payload(self) -> tuple:
        return (self.change,)


WatcherEvent = ReadyEvent | ErrorEvent | AddEvent | ChangeEvent
