"""
Local filesystem adapter.

Runs the blocking ``os`` calls in worker threads so a scan never stalls the
event loop; no watcher state is touched off the loop.
"""

import asyncio
import logging
import os
import stat as stat_module

from dirpoll.core.interfaces import IFileSystem
from dirpoll.models import FileMetadata, PathKind

logger = logging.getLogger(__name__)

_NS_PER_MS = 1_000_000


def _kind_from_mode(mode: int) -> PathKind:
    if stat_module.S_ISREG(mode):
        return PathKind.FILE
    if stat_module.S_ISDIR(mode):
        return PathKind.DIRECTORY
    return PathKind.OTHER


def _birth_time_ms(result: os.stat_result) -> int:
    # st_birthtime only exists on macOS, BSD and recent Windows builds
    birth_time = getattr(result, "st_birthtime", None)
    if birth_time is not None:
        return int(birth_time * 1000)
    return result.st_ctime_ns // _NS_PER_MS


def stat_path(path: str) -> FileMetadata:
    """Synchronously stat ``path``, following symlinks."""
    result = os.stat(path)
    return FileMetadata(
        modified=result.st_mtime_ns // _NS_PER_MS,
        modified_ns=result.st_mtime_ns,
        created=_birth_time_ms(result),
        size=result.st_size,
        kind=_kind_from_mode(result.st_mode),
        is_symlink=os.path.islink(path),
    )


class LocalFileSystem(IFileSystem):
    """Filesystem adapter backed by the ``os`` module."""

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(os.path.exists, path)

    async def list_dir(self, path: str) -> list[str]:
        names = await asyncio.to_thread(os.listdir, path)
        names.sort()
        logger.debug("Listed %d entries in %s", len(names), path)
        return names

    async def stat(self, path: str) -> FileMetadata:
        return await asyncio.to_thread(stat_path, path)
