"""Exception definitions module."""

from ghpm.core.exceptions.errors import (
    ConfigurationError,
    GhpmError,
    GitError,
    ManifestError,
    PackageError,
    SearchError,
)

__all__ = [
    "GhpmError",
    "GitError",
    "PackageError",
    "ManifestError",
    "SearchError",
    "ConfigurationError",
]
