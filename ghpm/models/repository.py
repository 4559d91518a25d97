"""Repository reference and search result models."""

import re

from pydantic import BaseModel, Field

from ghpm.core.exceptions import PackageError

GITHUB_URL_PATTERN = re.compile(
    r"^(?:https?://)?(?:www\.)?github\.com/"
    r"(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+?)(?:\.git)?/?$"
)
SHORT_PATTERN = re.compile(r"^(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+)$")


class RepoSpec(BaseModel):
    """A GitHub repository named by owner and repository."""

    owner: str = Field(description="Repository owner (user or organisation)")
    repo: str = Field(description="Repository name")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def name(self) -> str:
        """Package name the repository is installed under."""
        return self.repo

    @property
    def clone_url(self) -> str:
        return f"https://github.com/{self.full_name}.git"

    def __str__(self) -> str:
        return self.full_name

    @classmethod
    def parse(cls, value: str) -> "RepoSpec":
        """Parse ``owner/repo`` or a github.com URL.

        Args:
            value: User supplied repository reference.

        Returns:
            Parsed RepoSpec.

        Raises:
            PackageError: If the value names no repository.
        """
        text = value.strip()
        match = GITHUB_URL_PATTERN.match(text) or SHORT_PATTERN.match(text)
        if match is None:
            raise PackageError(
                f"Invalid repo format: {value}. Use owner/repo",
                details={"input": value},
            )
        return cls(owner=match.group("owner"), repo=match.group("repo"))

    @staticmethod
    def looks_like_spec(value: str) -> bool:
        """True when ``value`` names a repository rather than a search term."""
        return "/" in value


class RepoSearchItem(BaseModel):
    """One repository returned by the GitHub search API."""

    full_name: str
    html_url: str = ""
    description: str | None = None
    stargazers_count: int = 0
    language: str | None = None

    model_config = {"extra": "ignore"}

    @property
    def language_label(self) -> str:
        return self.language or "Unknown"

    def to_spec(self) -> RepoSpec:
        return RepoSpec.parse(self.full_name)
