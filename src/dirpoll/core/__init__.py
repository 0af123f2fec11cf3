"""Core interfaces shared by the watcher components."""

from dirpoll.core.interfaces import IFileSystem

__all__ = ["IFileSystem"]
