"""Build executor for running ecosystem build attempts.

Attempts run one at a time, in the order the ecosystem strategy lists
them, until one succeeds. Nothing here raises: every failure becomes a
``BuildOutcome`` so the cloned repository and its manifest survive.
"""

from pathlib import Path

from ghpm.build.runner import CommandRunner, SubprocessRunner
from ghpm.build.strategies.registry import StrategyRegistry, strategy_registry
from ghpm.build.tools import ToolAvailability, ToolPredicate
from ghpm.build.types import BuildAttempt, BuildOutcome, EcosystemTag, WorkingDir
from ghpm.core.logger.logger import get_logger

logger = get_logger(__name__)

SKIPPED = "skipped"
UNKNOWN_LANGUAGE = "unknown language"
UNSUPPORTED_LANGUAGE = "unsupported language"
NO_ATTEMPTS = "no build attempts available"


class BuildExecutor:
    """Executes build attempts for a repository.

    This class handles:
    - Short-circuiting unknown ecosystems and ``--no-build``
    - Checking each attempt's required tool before running it
    - Falling back to the next attempt when one fails
    - Treating optional follow-up steps as warnings only
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        tool_exists: ToolPredicate | None = None,
        registry: StrategyRegistry | None = None,
    ) -> None:
        """Initialize the build executor.

        Args:
            runner: Runs commands. Spawns real subprocesses by default.
            tool_exists: Predicate telling whether a tool is on PATH.
            registry: Strategies providing per-ecosystem attempts.
        """
        self.runner = runner or SubprocessRunner()
        self.tool_exists = tool_exists or ToolAvailability()
        self.registry = registry or strategy_registry

    def build(
        self,
        repo_root: Path,
        tag: EcosystemTag,
        no_build: bool = False,
    ) -> BuildOutcome:
        """Build a repository.

        Args:
            repo_root: Path to the repository root.
            tag: Detected ecosystem.
            no_build: Skip every build attempt unconditionally.

        Returns:
            BuildOutcome describing what happened.
        """
        if no_build:
            logger.info("Skipping build (--no-build flag)")
            return BuildOutcome(succeeded=False, reason=SKIPPED, skipped=True)

        if tag is EcosystemTag.UNKNOWN:
            logger.warning("Could not detect language - skipping auto-build")
            logger.info("You may need to build/install manually. Check the repo's README.")
            return BuildOutcome.failure(UNKNOWN_LANGUAGE, halted=True)

        strategy = self.registry.get(tag)
        if strategy is None:
            logger.warning(f"No build strategy registered for {tag.value}")
            return BuildOutcome.failure(UNSUPPORTED_LANGUAGE, halted=True)

        logger.info(f"Detected language: {tag.value}")

        early = strategy.precheck(repo_root)
        if early is not None:
            logger.info(f"Not building {repo_root.name}: {early.reason}")
            return early

        logger.info("Attempting auto-build/install...")
        return self.run_attempts(repo_root, strategy.build_attempts(repo_root))

    def run_attempts(
        self,
        repo_root: Path,
        attempts: list[BuildAttempt],
    ) -> BuildOutcome:
        """Try attempts in order until one succeeds.

        Args:
            repo_root: Path to the repository root.
            attempts: Attempts in priority order.

        Returns:
            Success with the winning attempt's description, or the failure
            of the last attempt tried.
        """
        if not attempts:
            return BuildOutcome.failure(NO_ATTEMPTS, halted=True)

        last_attempt: BuildAttempt | None = None

        for index, attempt in enumerate(attempts):
            has_next = index + 1 < len(attempts)

            missing = self._missing_tool(attempt)
            if missing is not None:
                if attempt.alternative and has_next:
                    logger.info(f"{missing} not found, skipping '{attempt.description}'")
                    continue
                logger.warning(f"Required tool not found on PATH: {missing}")
                return BuildOutcome.failure(
                    f"missing {missing}",
                    attempt_description=attempt.description,
                    halted=True,
                )

            last_attempt = attempt
            logger.info(f"Running {attempt.description}...")
            if self._run_attempt(repo_root, attempt):
                logger.info(f"Build successful! ({attempt.description})")
                return BuildOutcome.success(attempt.description)

            if attempt.alternative or not has_next:
                break
            logger.warning(
                f"{attempt.description} failed, trying {attempts[index + 1].description}..."
            )

        if last_attempt is None:
            return BuildOutcome.failure(NO_ATTEMPTS, halted=True)

        logger.warning("Build failed. You may need to build manually.")
        return BuildOutcome.failure(
            f"{last_attempt.description} failed",
            attempt_description=last_attempt.description,
        )

    def _missing_tool(self, attempt: BuildAttempt) -> str | None:
        """Return the first required tool that is not on PATH, if any.

        Each tool is queried once and the check stops at the first gap.
        """
        for tool in attempt.required_tools():
            if not self.tool_exists(tool):
                return tool
        return None

    def _run_attempt(self, repo_root: Path, attempt: BuildAttempt) -> bool:
        """Run every step of an attempt.

        Returns:
            True unless a non-optional step failed.
        """
        for step in attempt.steps():
            cwd = step.working_dir.resolve(repo_root)
            if step.working_dir is WorkingDir.BUILD_SUBDIR:
                try:
                    cwd.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    logger.warning(f"Cannot create build directory {cwd}: {e}")
                    return False

            command = " ".join(step.command)
            result = self.runner.run(step.command, cwd)
            if result.success:
                continue

            detail = result.error_message or f"exit code {result.return_code}"
            if step.optional:
                logger.warning(f"{command} failed ({detail}); this is sometimes expected")
                logger.info(f"Binary may be in: {repo_root}")
                continue

            logger.warning(f"{command} failed ({detail})")
            return False

        return True


def build_repository(
    repo_root: Path,
    tag: EcosystemTag,
    no_build: bool = False,
    timeout: int | None = None,
) -> BuildOutcome:
    """Convenience function to build a repository with real subprocesses.

    Args:
        repo_root: Path to the repository root.
        tag: Detected ecosystem.
        no_build: Skip the build entirely.
        timeout: Optional per-command timeout in seconds.

    Returns:
        BuildOutcome describing what happened.
    """
    executor = BuildExecutor(runner=SubprocessRunner(timeout=timeout))
    return executor.build(repo_root, tag, no_build=no_build)
