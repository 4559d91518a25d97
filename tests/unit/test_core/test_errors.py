"""Tests for the exception hierarchy."""

import pytest

from ghpm.core.exceptions import (
    ConfigurationError,
    GhpmError,
    GitError,
    ManifestError,
    PackageError,
    SearchError,
)


class TestErrors:
    """Test error details and formatting."""

    def test_message_only(self) -> None:
        """Test an error without details prints its message."""
        error = GhpmError("boom")
        assert str(error) == "boom"
        assert error.details == {}

    def test_details_in_str(self) -> None:
        """Test details are appended to the message."""
        error = GitError("Git clone failed", repo_url="https://github.com/a/b.git")
        assert error.details["repo_url"] == "https://github.com/a/b.git"
        assert str(error).startswith("Git clone failed - Details:")

    def test_context_fields(self) -> None:
        """Test each subclass records its context."""
        assert PackageError("x", package_name="fzf").details == {"package": "fzf"}
        assert ManifestError("x", manifest_path="/m.json").details == {"manifest_path": "/m.json"}
        assert SearchError("x", query="q", status_code=0).details == {
            "query": "q",
            "status_code": 0,
        }
        assert ConfigurationError("x", config_key="paths").details == {"config_key": "paths"}

    @pytest.mark.parametrize(
        "error_class",
        [GitError, PackageError, ManifestError, SearchError, ConfigurationError],
    )
    def test_hierarchy(self, error_class: type[GhpmError]) -> None:
        """Test every error can be caught as GhpmError."""
        with pytest.raises(GhpmError):
            raise error_class("failed")
