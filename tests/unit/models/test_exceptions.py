"""Unit tests for the exception hierarchy."""

from dirpoll.models import (
    BaseError,
    ConfigurationError,
    MetadataFetchError,
    PathNotFoundError,
    SequencingError,
    WatcherError,
)
from dirpoll.models.exceptions import classify_os_error


class TestWatcherErrors:
    """Test cases for watcher error types."""

    def test_path_not_found_message(self):
        """Test that the message names the missing path."""
        error = PathNotFoundError("/missing/root", operation="scan")

        assert error.message == "path not found: /missing/root"
        assert error.error_code == "PATH_NOT_FOUND"
        assert error.path == "/missing/root"
        assert error.operation == "scan"
        assert str(error) == "[PATH_NOT_FOUND] path not found: /missing/root"
        assert isinstance(error, WatcherError)
        assert isinstance(error, BaseError)

    def test_metadata_fetch_message(self):
        """Test that the message names the operation, path and cause."""
        cause = PermissionError(13, "Permission denied")
        error = MetadataFetchError("/tree/secret", operation="stat", underlying_error=cause)

        assert error.message.startswith("failed to stat: /tree/secret")
        assert "Permission denied" in error.message
        assert error.cause is cause
        assert error.error_code == "METADATA_FETCH_FAILED"

    def test_sequencing_error_defaults(self):
        """Test the default sequencing message."""
        error = SequencingError(path="/tree")

        assert error.message == "watch requested before initial collect"
        assert error.operation == "watch"
        assert error.path == "/tree"

    def test_configuration_error_context(self):
        """Test configuration error context fields."""
        error = ConfigurationError("bad", config_key="poll_interval_seconds", actual_value=0)

        assert error.context == {"config_key": "poll_interval_seconds", "actual_value": "0"}
        assert "ConfigurationError" in repr(error)


class TestClassifyOsError:
    """Test cases for mapping OSError to watcher errors."""

    def test_missing_path_becomes_path_not_found(self):
        """Test FileNotFoundError classification."""
        error = classify_os_error("/tree/gone", "stat", FileNotFoundError(2, "No such file"))

        assert isinstance(error, PathNotFoundError)
        assert error.operation == "stat"

    def test_other_failures_become_metadata_errors(self):
        """Test classification of any other OSError."""
        error = classify_os_error("/tree/locked", "list_dir", PermissionError(13, "Permission denied"))

        assert isinstance(error, MetadataFetchError)
        assert error.message.startswith("failed to list_dir: /tree/locked")
