"""
Monitoring package for polling-based change detection.

This package provides the traverser that diffs a tree against a snapshot,
the event channel, and the watcher that reruns scans on an interval.
"""

from .event_channel import EventChannel
from .poll_timer import PollTimer
from .traverser import ScanStats, Traverser, matches_ignore_rule
from .watcher import PollingWatcher, WatcherState

__all__ = [
    "EventChannel",
    "PollTimer",
    "PollingWatcher",
    "ScanStats",
    "Traverser",
    "WatcherState",
    "matches_ignore_rule",
]
