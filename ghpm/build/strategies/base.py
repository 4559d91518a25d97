"""
Base Strategy - Abstract base class for ecosystem build strategies.

Each supported ecosystem (Go, Rust, Node, ...) provides one strategy that
knows how to recognise a repository, which commands build it and where
the resulting executables end up. Shared orchestration code only talks to
this interface, so adding an ecosystem means adding a strategy.
"""

import itertools
import os
import stat
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from ghpm.build.types import BinaryCandidate, BuildAttempt, BuildOutcome, EcosystemTag
from ghpm.core.logger.logger import get_logger

logger = get_logger(__name__)

EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class BaseStrategy(ABC):
    """
    Abstract base class for ecosystem strategies.

    Subclasses set ``tag`` and ``marker_files`` and implement
    ``build_attempts`` and ``find_binaries``.
    """

    tag: EcosystemTag = EcosystemTag.UNKNOWN
    description: str = "Base strategy"
    marker_files: tuple[str, ...] = ()
    # Interpreted ecosystems get execute permission on every candidate.
    grants_execute: bool = False

    def detect_applies(self, repo_root: Path) -> bool:
        """
        Check whether the repository belongs to this ecosystem.

        Args:
            repo_root: Repository root directory.

        Returns:
            True if one of the marker files exists at the top level.
        """
        return any((repo_root / marker).exists() for marker in self.marker_files)

    def precheck(self, repo_root: Path) -> BuildOutcome | None:
        """
        Decide the outcome before any tool is consulted.

        Returns:
            A final BuildOutcome to skip running attempts, or None to run
            ``build_attempts`` normally.
        """
        return None

    @abstractmethod
    def build_attempts(self, repo_root: Path) -> list[BuildAttempt]:
        """
        Return the ordered attempts for building the repository.

        Args:
            repo_root: Repository root directory.

        Returns:
            Attempts in priority order; later entries are fallbacks.
        """

    @abstractmethod
    def find_binaries(self, repo_root: Path, repo_name: str) -> Iterator[Path]:
        """
        Yield paths that look like executables produced by the build.

        Args:
            repo_root: Repository root directory.
            repo_name: Name the package was installed under.
        """

    def resolve_candidates(
        self,
        repo_root: Path,
        repo_name: str,
    ) -> Iterator[BinaryCandidate]:
        """
        Yield binary candidates, granting execute permission if needed.

        Args:
            repo_root: Repository root directory.
            repo_name: Name the package was installed under.

        Yields:
            BinaryCandidate for each distinct path found.
        """
        seen: set[Path] = set()
        entries = itertools.chain(
            self.named_binaries(repo_root, repo_name),
            ((None, path) for path in self.find_binaries(repo_root, repo_name)),
        )
        for link_name, path in entries:
            key = path.absolute()
            if key in seen:
                continue
            seen.add(key)
            if self.grants_execute:
                make_executable(path)
            yield BinaryCandidate(
                path=path,
                executable_bit_set=has_execute_bit(path),
                link_name=link_name,
            )

    def named_binaries(
        self,
        repo_root: Path,
        repo_name: str,
    ) -> Iterator[tuple[str, Path]]:
        """Yield binaries declared by package metadata as (name, path)."""
        return iter(())

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} tag={self.tag.value}>"


def has_execute_bit(path: Path) -> bool:
    """Return True if any execute permission bit is set on ``path``."""
    try:
        return bool(path.stat().st_mode & EXECUTE_BITS)
    except OSError:
        return False


def is_executable_file(path: Path) -> bool:
    """Return True for a regular file with at least one execute bit."""
    return path.is_file() and has_execute_bit(path)


def make_executable(path: Path) -> bool:
    """Add execute permission for user, group and others.

    Returns:
        True if the file is executable afterwards.
    """
    try:
        mode = path.stat().st_mode
        if mode & EXECUTE_BITS != EXECUTE_BITS:
            path.chmod(mode | EXECUTE_BITS)
        return True
    except OSError as e:
        logger.warning(f"Could not make {path} executable: {e}")
        return False


def iter_files(directories: Iterable[Path]) -> Iterator[Path]:
    """Yield regular files directly inside each existing directory.

    Entries are sorted by name so repeated runs see the same order.
    """
    for directory in directories:
        if not directory.is_dir():
            continue
        try:
            entries = sorted(os.scandir(directory), key=lambda e: e.name)
        except OSError as e:
            logger.debug(f"Cannot list {directory}: {e}")
            continue
        for entry in entries:
            if entry.is_file():
                yield Path(entry.path)


def name_matcher(
    repo_name: str,
    suffixes: tuple[str, ...],
) -> Callable[[Path], bool]:
    """Build the predicate used by the script-scanning ecosystems.

    A file matches when its name equals the repository name, contains
    ``install`` (any case) or ends in one of ``suffixes``.
    """

    def matches(path: Path) -> bool:
        name = path.name
        return (
            name == repo_name
            or "install" in name.lower()
            or name.endswith(suffixes)
        )

    return matches


def scan_for_scripts(
    repo_root: Path,
    repo_name: str,
    suffixes: tuple[str, ...],
) -> Iterator[Path]:
    """Scan the repository root and ``bin/`` for script-like files."""
    matches = name_matcher(repo_name, suffixes)
    for path in iter_files((repo_root, repo_root / "bin")):
        if matches(path):
            yield path
