"""
Data models for snapshot entries and filesystem metadata.

An Entry is what the snapshot stores for one observed file; FileMetadata is
what a filesystem adapter reports for any path.
"""

import os
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PathKind(str, Enum):
    """Classification of a path on disk."""

    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


class FileMetadata(BaseModel):
    """
    Metadata reported by a filesystem adapter for a single path.

    Timestamps are integer epoch milliseconds; ``modified_ns`` keeps the full
    resolution for directory cache invalidation.
    """

    modified: int = Field(..., description="Modification time in epoch milliseconds")
    modified_ns: int = Field(..., description="Modification time in epoch nanoseconds")
    created: int = Field(..., description="Creation (birth) time in epoch milliseconds")
    size: int = Field(default=0, ge=0, description="Size in bytes")
    kind: PathKind = Field(..., description="File, directory or anything else")
    is_symlink: bool = Field(default=False, description="Whether the path itself is a symbolic link")

    @property
    def is_file(self) -> bool:
        return self.kind == PathKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind == PathKind.DIRECTORY

    model_config = ConfigDict(frozen=True)


class Entry(BaseModel):
    """
    Stored metadata for one observed file.

    Entries are immutable: a rescan replaces the snapshot value with a new
    Entry rather than updating fields of the old one.
    """

    name: str = Field(..., min_length=1, description="Base name of the file")
    path: str = Field(..., min_length=1, description="Absolute path, equal to the snapshot key")
    modified: int = Field(..., description="Modification time in epoch milliseconds")
    created: int = Field(..., description="Creation time in epoch milliseconds")
    type: Literal["file"] = Field(default="file", description="Always 'file'; directories are never stored")

    @field_validator('path')
    @classmethod
    def validate_path(cls, v):
        """Ensure the path is absolute."""
        if not os.path.isabs(v):
            raise ValueError("path must be an absolute path")
        return v

    @classmethod
    def from_metadata(cls, path: str, metadata: FileMetadata) -> "Entry":
        """Build an Entry for ``path`` from adapter metadata."""
        return cls(
            name=os.path.basename(path),
            path=path,
            modified=metadata.modified,
            created=metadata.created,
        )

    def __str__(self) -> str:
        return f"Entry({self.path}, modified={self.modified})"

    model_config = ConfigDict(frozen=True)


class FileChange(BaseModel):
    """Payload of a change event: the new observation and the one it replaced."""

    updated: Entry
    previous: Entry

    @property
    def path(self) -> str:
        """Path of the changed file."""
        return self.updated.path

    model_config = ConfigDict(frozen=True)


Snapshot = dict[str, Entry]
