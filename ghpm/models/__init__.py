"""Data models module."""

from ghpm.models.package import Manifest
from ghpm.models.repository import RepoSearchItem, RepoSpec

__all__ = [
    "Manifest",
    "RepoSearchItem",
    "RepoSpec",
]
