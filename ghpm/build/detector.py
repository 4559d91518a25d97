"""Ecosystem detection for cloned repositories.

Marker files are checked in a fixed priority order (Go, Rust, Node,
Python, Ruby, C/C++); only when none match does the weaker shell
install-script heuristic apply. A repository with no evidence at all is
classified as Unknown.
"""

from pathlib import Path

from ghpm.build.strategies.registry import StrategyRegistry, strategy_registry
from ghpm.build.types import EcosystemTag
from ghpm.core.logger.logger import get_logger

logger = get_logger(__name__)


class LanguageDetector:
    """Classifies a repository into one EcosystemTag."""

    def __init__(self, registry: StrategyRegistry | None = None) -> None:
        """Initialize the detector.

        Args:
            registry: Strategies to consult, in priority order.
        """
        self.registry = registry or strategy_registry

    def detect(self, repo_root: Path) -> EcosystemTag:
        """Detect the ecosystem of a repository.

        Read-only and deterministic; never raises.

        Args:
            repo_root: Path to the repository root.

        Returns:
            The matching EcosystemTag, or UNKNOWN.
        """
        if not repo_root.is_dir():
            logger.debug(f"Not a directory, cannot detect ecosystem: {repo_root}")
            return EcosystemTag.UNKNOWN

        for strategy in self.registry:
            try:
                applies = strategy.detect_applies(repo_root)
            except OSError as e:
                logger.debug(f"{strategy!r} could not inspect {repo_root}: {e}")
                continue
            if applies:
                logger.debug(f"Detected {strategy.tag.value} ({strategy.description})")
                return strategy.tag

        return EcosystemTag.UNKNOWN


def detect_language(repo_root: Path) -> EcosystemTag:
    """Convenience function to detect a repository's ecosystem.

    Args:
        repo_root: Path to the repository root.

    Returns:
        Detected EcosystemTag.
    """
    return LanguageDetector().detect(repo_root)
