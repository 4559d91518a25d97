"""Install pipeline: detect, build, resolve and link one repository."""

from pathlib import Path

from ghpm.build.detector import LanguageDetector
from ghpm.build.executor import BuildExecutor
from ghpm.build.linker import BinaryLinker
from ghpm.build.resolver import BinaryResolver
from ghpm.build.runner import CommandRunner, SubprocessRunner
from ghpm.build.strategies.registry import StrategyRegistry, strategy_registry
from ghpm.build.tools import ToolPredicate
from ghpm.build.types import PipelineResult, PipelineStage
from ghpm.core.logger.logger import get_logger

logger = get_logger(__name__)


class BuildPipeline:
    """Runs Detecting -> Building -> Resolving -> Linking for a repository.

    A halted build (unknown ecosystem, missing tool, nothing to run) skips
    Resolving; Linking still runs with no candidates so the empty result
    is reported.
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        tool_exists: ToolPredicate | None = None,
        registry: StrategyRegistry | None = None,
        linker: BinaryLinker | None = None,
    ) -> None:
        registry = registry or strategy_registry
        self.detector = LanguageDetector(registry)
        self.executor = BuildExecutor(
            runner=runner or SubprocessRunner(),
            tool_exists=tool_exists,
            registry=registry,
        )
        self.resolver = BinaryResolver(registry)
        self.linker = linker or BinaryLinker()

    def run(
        self,
        repo_root: Path,
        repo_name: str,
        link_dir: Path,
        no_build: bool = False,
    ) -> PipelineResult:
        """Process one cloned repository.

        Args:
            repo_root: Path to the cloned repository.
            repo_name: Name the package is installed under.
            link_dir: Directory receiving the binary symlinks.
            no_build: Skip every build attempt.

        Returns:
            PipelineResult with the tag, build outcome and created links.
        """
        logger.debug(f"[{PipelineStage.DETECTING.value}] {repo_root}")
        tag = self.detector.detect(repo_root)

        logger.debug(f"[{PipelineStage.BUILDING.value}] {repo_name} ({tag.value})")
        outcome = self.executor.build(repo_root, tag, no_build=no_build)

        if outcome.halted:
            candidates = []
        else:
            logger.debug(f"[{PipelineStage.RESOLVING.value}] {repo_name}")
            candidates = self.resolver.resolve(repo_root, repo_name, tag)

        logger.debug(f"[{PipelineStage.LINKING.value}] {link_dir}")
        links = self.linker.link(candidates, link_dir)

        return PipelineResult(
            tag=tag,
            outcome=outcome,
            links=links,
            stage=PipelineStage.DONE,
        )


def run_pipeline(
    repo_root: Path,
    repo_name: str,
    link_dir: Path,
    no_build: bool = False,
    timeout: int | None = None,
) -> PipelineResult:
    """Convenience function running the pipeline with real subprocesses."""
    pipeline = BuildPipeline(runner=SubprocessRunner(timeout=timeout))
    return pipeline.run(repo_root, repo_name, link_dir, no_build=no_build)
