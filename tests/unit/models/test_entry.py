"""Unit tests for entry and metadata models."""

import pytest
from dirpoll.models import Entry, FileChange, FileMetadata, PathKind
from pydantic import ValidationError


class TestFileMetadata:
    """Test cases for FileMetadata."""

    def test_kind_properties(self):
        """Test file and directory classification helpers."""
        file_meta = FileMetadata(modified=1, modified_ns=1_000_000, created=1, kind=PathKind.FILE)
        dir_meta = FileMetadata(modified=1, modified_ns=1_000_000, created=1, kind=PathKind.DIRECTORY)
        other_meta = FileMetadata(modified=1, modified_ns=1_000_000, created=1, kind=PathKind.OTHER)

        assert file_meta.is_file and not file_meta.is_directory
        assert dir_meta.is_directory and not dir_meta.is_file
        assert not other_meta.is_file and not other_meta.is_directory

    def test_negative_size_rejected(self):
        """Test that size must not be negative."""
        with pytest.raises(ValidationError):
            FileMetadata(modified=1, modified_ns=1, created=1, size=-1, kind=PathKind.FILE)


class TestEntry:
    """Test cases for Entry."""

    def test_from_metadata(self):
        """Test building an entry from adapter metadata."""
        metadata = FileMetadata(modified=1500, modified_ns=1_500_000_000, created=1200, size=42, kind=PathKind.FILE)

        entry = Entry.from_metadata("/project/src/main.py", metadata)

        assert entry.name == "main.py"
        assert entry.path == "/project/src/main.py"
        assert entry.modified == 1500
        assert entry.created == 1200
        assert entry.type == "file"

    def test_relative_path_rejected(self):
        """Test that entry paths must be absolute."""
        with pytest.raises(ValidationError) as exc_info:
            Entry(name="main.py", path="src/main.py", modified=1, created=1)

        assert "path must be an absolute path" in str(exc_info.value)

    def test_entry_is_immutable(self):
        """Test that entries cannot be partially updated."""
        entry = Entry(name="a.txt", path="/tree/a.txt", modified=1, created=1)

        with pytest.raises(ValidationError):
            entry.modified = 2

    def test_entries_compare_by_value(self):
        """Test equality of identical observations."""
        first = Entry(name="a.txt", path="/tree/a.txt", modified=1, created=1)
        second = Entry(name="a.txt", path="/tree/a.txt", modified=1, created=1)

        assert first == second

    def test_string_representation(self):
        """Test string representation of an entry."""
        entry = Entry(name="a.txt", path="/tree/a.txt", modified=7, created=1)

        assert str(entry) == "Entry(/tree/a.txt, modified=7)"


class TestFileChange:
    """Test cases for FileChange."""

    def test_path_follows_updated_entry(self):
        """Test the path shortcut of a change payload."""
        previous = Entry(name="a.txt", path="/tree/a.txt", modified=1, created=1)
        updated = Entry(name="a.txt", path="/tree/a.txt", modified=2, created=1)

        change = FileChange(updated=updated, previous=previous)

        assert change.path == "/tree/a.txt"
        assert change.previous.modified == 1
        assert change.updated.modified == 2
