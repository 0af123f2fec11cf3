"""Configuration management and settings."""

from dirpoll.config.settings import IgnoreRule, LogLevel, WatcherSettings, get_config, reload_config, set_config

__all__ = ["WatcherSettings", "IgnoreRule", "LogLevel", "get_config", "reload_config", "set_config"]
