"""Configuration management for ghpm."""

from ghpm.core.config.loader import ConfigLoader
from ghpm.core.config.settings import (
    BuildSettings,
    GitHubSettings,
    GitSettings,
    LoggingSettings,
    PathSettings,
    Settings,
    get_settings,
)

__all__ = [
    "ConfigLoader",
    "Settings",
    "PathSettings",
    "GitSettings",
    "GitHubSettings",
    "BuildSettings",
    "LoggingSettings",
    "get_settings",
]
