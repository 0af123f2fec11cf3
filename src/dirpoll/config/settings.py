"""
Configuration management for the directory polling watcher.

Handles environment variables, optional .env loading, and provides
default settings with validation for the watcher and its logging.
"""

import re
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dirpoll.models.exceptions import ConfigurationError

IgnoreRule = str | re.Pattern[str]


class LogLevel(str, Enum):
    """Logging level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class WatcherSettings(BaseSettings):
    """
    Central configuration class for dirpoll watchers.

    Every option can be supplied through ``DIRPOLL_``-prefixed environment
    variables; list options take JSON, e.g.
    ``DIRPOLL_IGNORE_PATTERNS='["node_modules", ".git"]'``.
    """

    model_config = SettingsConfigDict(
        env_prefix="DIRPOLL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Polling Configuration ===
    poll_interval_seconds: float = Field(default=0.1, description="Delay between polling ticks")
    suppress_initial_adds: bool = Field(
        default=False, description="Do not emit add events for files found by collect()"
    )
    follow_symlinks: bool = Field(default=False, description="Recurse into symlinked directories")

    # === Ignore Rules ===
    ignore_patterns: list[str] = Field(
        default_factory=list, description="Literal substrings matched against names and parent paths"
    )
    ignore_regexes: list[str] = Field(
        default_factory=list, description="Regular expressions searched in names and parent paths"
    )

    # === Logging Configuration ===
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_file: Path | None = Field(default=None, description="Log file path (stderr if None)")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s", description="Log message format"
    )

    @field_validator('ignore_patterns')
    @classmethod
    def validate_ignore_patterns(cls, v):
        """Drop empty patterns, which would match everything."""
        return [pattern for pattern in v if pattern]

    @model_validator(mode='after')
    def validate_poll_interval(self):
        """Ensure the poll interval is positive."""
        if self.poll_interval_seconds <= 0:
            raise ConfigurationError(
                "poll_interval_seconds must be greater than zero",
                config_key="poll_interval_seconds",
                expected_type="float > 0",
                actual_value=self.poll_interval_seconds,
            )
        return self

    @model_validator(mode='after')
    def validate_ignore_regexes(self):
        """Ensure every ignore regex compiles."""
        for expression in self.ignore_regexes:
            try:
                re.compile(expression)
            except re.error as e:
                raise ConfigurationError(
                    f"Invalid ignore regex {expression!r}: {e}",
                    config_key="ignore_regexes",
                    expected_type="regular expression",
                    actual_value=expression,
                ) from e
        return self

    def compiled_ignore_rules(self) -> list[IgnoreRule]:
        """Get the configured ignore rules, literal patterns first."""
        rules: list[IgnoreRule] = list(self.ignore_patterns)
        rules.extend(re.compile(expression) for expression in self.ignore_regexes)
        return rules

    def get_log_config(self) -> dict[str, Any]:
        """Get logging configuration dictionary."""
        level = LogLevel(self.log_level).value
        config = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"standard": {"format": self.log_format}},
            "handlers": {
                "default": {
                    "level": level,
                    "formatter": "standard",
                    "class": "logging.StreamHandler" if not self.log_file else "logging.FileHandler",
                }
            },
            "loggers": {"dirpoll": {"handlers": ["default"], "level": level, "propagate": False}},
        }

        if self.log_file:
            config["handlers"]["default"]["filename"] = str(self.log_file)

        return config


# Global configuration instance
_config: WatcherSettings | None = None


def get_config() -> WatcherSettings:
    """
    Get the global configuration instance.

    Creates a new instance on first call and reuses it for subsequent calls.
    """
    global _config
    if _config is None:
        _config = WatcherSettings()
    return _config


def reload_config() -> WatcherSettings:
    """Force reload the configuration from environment/files."""
    global _config
    _config = WatcherSettings()
    return _config


def set_config(config: WatcherSettings) -> None:
    """
    Set a custom configuration instance.

    Primarily used for testing or embedding scenarios.
    """
    global _config
    _config = config
