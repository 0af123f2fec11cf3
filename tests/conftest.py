"""Shared fixtures for the dirpoll test suite."""

import posixpath

import pytest
from dirpoll.core.interfaces import IFileSystem
from dirpoll.models import FileMetadata, PathKind


def make_metadata(kind: PathKind, modified: int, is_symlink: bool = False) -> FileMetadata:
    """Build metadata with millisecond timestamps."""
    return FileMetadata(
        modified=modified,
        modified_ns=modified * 1_000_000,
        created=modified,
        size=0,
        kind=kind,
        is_symlink=is_symlink,
    )


class InMemoryFileSystem(IFileSystem):
    """Filesystem adapter over a dict of POSIX paths, with failure injection."""

    def __init__(self):
        self.nodes: dict[str, FileMetadata] = {}
        self.stat_failures: dict[str, OSError] = {}
        self.list_failures: dict[str, OSError] = {}
        self.extra_names: dict[str, list[str]] = {}
        self.list_calls: list[str] = []
        self.stat_calls: list[str] = []

    def add_dir(self, path: str, modified: int = 1_000, is_symlink: bool = False) -> None:
        self.nodes[path] = make_metadata(PathKind.DIRECTORY, modified, is_symlink)

    def add_file(self, path: str, modified: int = 1_000) -> None:
        self.nodes[path] = make_metadata(PathKind.FILE, modified)

    def touch(self, path: str, modified: int) -> None:
        self.nodes[path] = make_metadata(self.nodes[path].kind, modified, self.nodes[path].is_symlink)

    async def exists(self, path: str) -> bool:
        return path in self.nodes

    async def list_dir(self, path: str) -> list[str]:
        self.list_calls.append(path)
        if path in self.list_failures:
            raise self.list_failures[path]
        if path not in self.nodes:
            raise FileNotFoundError(path)
        names = [
            posixpath.basename(candidate)
            for candidate in self.nodes
            if candidate != path and posixpath.dirname(candidate) == path
        ]
        names.extend(self.extra_names.get(path, []))
        return sorted(names)

    async def stat(self, path: str) -> FileMetadata:
        self.stat_calls.append(path)
        if path in self.stat_failures:
            raise self.stat_failures[path]
        if path not in self.nodes:
            raise FileNotFoundError(path)
        return self.nodes[path]


@pytest.fixture
def memory_fs():
    """Create an in-memory tree rooted at /tree with two files."""
    fs = InMemoryFileSystem()
    fs.add_dir("/tree")
    fs.add_file("/tree/a.txt")
    fs.add_file("/tree/b.txt")
    return fs
