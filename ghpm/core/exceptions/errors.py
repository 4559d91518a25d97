"""Custom exception definitions for ghpm."""

from typing import Any


class GhpmError(Exception):
    """Base exception for all ghpm errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class GitError(GhpmError):
    """Exception raised for Git operation errors."""

    def __init__(
        self,
        message: str,
        repo_url: str | None = None,
        repo_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize Git error.

        Args:
            message: Error message.
            repo_url: Repository URL that caused the error.
            repo_path: Local repository path involved.
            details: Additional error details.
        """
        details = details or {}
        if repo_url:
            details["repo_url"] = repo_url
        if repo_path:
            details["repo_path"] = repo_path
        super().__init__(message, details)


class PackageError(GhpmError):
    """Exception raised for package lifecycle errors."""

    def __init__(
        self,
        message: str,
        package_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize package error.

        Args:
            message: Error message.
            package_name: Name of the package involved.
            details: Additional error details.
        """
        details = details or {}
        if package_name:
            details["package"] = package_name
        super().__init__(message, details)


class ManifestError(GhpmError):
    """Exception raised when a manifest record cannot be read or written."""

    def __init__(
        self,
        message: str,
        manifest_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if manifest_path:
            details["manifest_path"] = manifest_path
        super().__init__(message, details)


class SearchError(GhpmError):
    """Exception raised for GitHub search errors."""

    def __init__(
        self,
        message: str,
        query: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if query:
            details["query"] = query
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)


class ConfigurationError(GhpmError):
    """Exception raised for configuration errors."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message.
            config_key: Configuration key that caused the error.
            details: Additional error details.
        """
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
