"""Discovery of executables produced by a build.

Each ecosystem leaves its binaries somewhere different: ``go install``
writes to the Go bin directory, cargo to ``target/release``, interpreted
projects ship scripts in the repository itself. The per-ecosystem
heuristics live on the strategies; this module picks the right one.
"""

from collections.abc import Iterator
from pathlib import Path

from ghpm.build.strategies.registry import StrategyRegistry, strategy_registry
from ghpm.build.types import BinaryCandidate, EcosystemTag
from ghpm.core.logger.logger import get_logger

logger = get_logger(__name__)


class BinaryResolver:
    """Finds binary candidates for a built repository."""

    def __init__(self, registry: StrategyRegistry | None = None) -> None:
        self.registry = registry or strategy_registry

    def resolve(
        self,
        repo_root: Path,
        repo_name: str,
        tag: EcosystemTag,
    ) -> Iterator[BinaryCandidate]:
        """Yield candidate executables.

        The sequence is lazy and can only be consumed once; callers should
        treat it as a set. Interpreted ecosystems get execute permission
        granted on each candidate as it is yielded.

        Args:
            repo_root: Path to the repository root.
            repo_name: Name the package was installed under.
            tag: Detected ecosystem.

        Yields:
            BinaryCandidate for each discovered file.
        """
        strategy = self.registry.get(tag)
        if strategy is None:
            logger.debug(f"No binary heuristics for {tag.value}")
            return

        for candidate in strategy.resolve_candidates(repo_root, repo_name):
            logger.debug(f"Binary candidate: {candidate.path}")
            yield candidate


def resolve_binaries(
    repo_root: Path,
    repo_name: str,
    tag: EcosystemTag,
) -> list[BinaryCandidate]:
    """Convenience function returning every candidate as a list."""
    return list(BinaryResolver().resolve(repo_root, repo_name, tag))
