"""
Custom exception classes for the directory polling watcher.

Provides specific exception types for the failures a scan can run into so
callers can tell a missing root from a single unreadable entry.
"""

from typing import Any


class BaseError(Exception):
    """
    Base exception class for all dirpoll errors.

    All custom exceptions in the package inherit from this base class
    to enable consistent error handling and logging.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        """
        Initialize the error.

        Args:
            message: Human-readable error description
            error_code: Optional error code for programmatic handling
            context: Optional dictionary with error context information
            cause: Optional underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation including error code if present."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}', "
            f"context={self.context})"
        )


class ConfigurationError(BaseError):
    """Raised when there are configuration or settings issues."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        expected_type: str | None = None,
        actual_value: Any | None = None,
    ):
        context = {}
        if config_key:
            context["config_key"] = config_key
        if expected_type:
            context["expected_type"] = expected_type
        if actual_value is not None:
            context["actual_value"] = str(actual_value)

        super().__init__(message, error_code="CONFIG_ERROR", context=context)


class WatcherError(BaseError):
    """Base class for errors raised or emitted while watching a tree."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        path: str | None = None,
        operation: str | None = None,
        underlying_error: Exception | None = None,
    ):
        context = {}
        if path:
            context["path"] = path
        if operation:
            context["operation"] = operation

        super().__init__(message, error_code=error_code, context=context, cause=underlying_error)

    @property
    def path(self) -> str | None:
        """Path the failure relates to, if any."""
        return self.context.get("path")

    @property
    def operation(self) -> str | None:
        """Name of the operation that failed, if known."""
        return self.context.get("operation")


class PathNotFoundError(WatcherError):
    """Raised when the watch root, or a path met during a scan, does not exist."""

    def __init__(self, path: str, operation: str | None = None, underlying_error: Exception | None = None):
        super().__init__(
            f"path not found: {path}",
            error_code="PATH_NOT_FOUND",
            path=path,
            operation=operation,
            underlying_error=underlying_error,
        )


class MetadataFetchError(WatcherError):
    """Raised when stat or listing fails for a discovered path."""

    def __init__(self, path: str, operation: str = "stat", underlying_error: Exception | None = None):
        reason = f" ({underlying_error})" if underlying_error else ""
        super().__init__(
            f"failed to {operation}: {path}{reason}",
            error_code="METADATA_FETCH_FAILED",
            path=path,
            operation=operation,
            underlying_error=underlying_error,
        )


class SequencingError(WatcherError):
    """Raised when watch() is requested before a collect() has completed."""

    def __init__(self, message: str = "watch requested before initial collect", path: str | None = None):
        super().__init__(message, error_code="SEQUENCING_ERROR", path=path, operation="watch")


def classify_os_error(path: str, operation: str, error: OSError) -> WatcherError:
    """Map an OSError from the filesystem adapter onto the watcher taxonomy."""
    if isinstance(error, FileNotFoundError):
        return PathNotFoundError(path, operation=operation, underlying_error=error)
    return MetadataFetchError(path, operation=operation, underlying_error=error)
