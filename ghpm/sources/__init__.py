"""Repository sources: git transport and GitHub search."""

from ghpm.sources.git_operations import GitOperations
from ghpm.sources.github_search import GitHubSearchClient, clamp_per_page

__all__ = [
    "GitOperations",
    "GitHubSearchClient",
    "clamp_per_page",
]
