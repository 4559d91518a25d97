"""Git operations wrapper with retry support."""

import shutil
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from ghpm.core.config.settings import get_settings
from ghpm.core.exceptions import GitError
from ghpm.core.logger.logger import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class GitOperations:
    """Handles Git clone and pull operations for installed packages."""

    def __init__(
        self,
        retry_attempts: int | None = None,
        retry_delay: int | None = None,
        clone_depth: int | None = None,
    ) -> None:
        """Initialize Git operations.

        Args:
            retry_attempts: Number of retry attempts for failed network operations.
            retry_delay: Delay between retries in seconds.
            clone_depth: Clone depth (0 = full clone).
        """
        settings = get_settings()

        self.retry_attempts = (
            retry_attempts if retry_attempts is not None else settings.git.retry_attempts
        )
        self.retry_delay = retry_delay if retry_delay is not None else settings.git.retry_delay
        self.clone_depth = clone_depth if clone_depth is not None else settings.git.clone_depth

    def _retry_operation(
        self,
        operation: Callable[..., T],
        *args: Any,
        cleanup: Callable[[], None] | None = None,
        **kwargs: Any,
    ) -> T:
        """Execute an operation with retry logic.

        Args:
            operation: Callable to execute.
            *args: Positional arguments for the operation.
            cleanup: Called after every failed attempt.
            **kwargs: Keyword arguments for the operation.

        Returns:
            Result of the operation.

        Raises:
            GitError: If all retries fail.
        """
        last_error: GitCommandError | None = None

        for attempt in range(1, self.retry_attempts + 1):
            try:
                return operation(*args, **kwargs)
            except GitCommandError as e:
                last_error = e
                logger.warning(
                    f"Git operation failed (attempt {attempt}/{self.retry_attempts}): {e}"
                )
                if cleanup is not None:
                    cleanup()
                if attempt < self.retry_attempts:
                    logger.info(f"Retrying in {self.retry_delay} seconds...")
                    time.sleep(self.retry_delay)

        raise GitError(
            f"Git operation failed after {self.retry_attempts} attempts",
            details={"last_error": str(last_error)},
        )

    def is_git_repo(self, path: Path) -> bool:
        """Check if a path is a Git repository.

        Args:
            path: Path to check.

        Returns:
            True if path is a Git repository.
        """
        try:
            Repo(path)
            return True
        except (InvalidGitRepositoryError, NoSuchPathError):
            return False

    def clone(self, repo_url: str, target_path: Path) -> Repo:
        """Clone a Git repository.

        A partially written target directory is removed after each failed
        attempt so a retry, or a later install, starts clean.

        Args:
            repo_url: URL of the repository to clone.
            target_path: Local path to clone into.

        Returns:
            Cloned Repo object.

        Raises:
            GitError: If clone fails.
        """
        logger.info(f"Cloning {repo_url} to {target_path}")

        clone_kwargs: dict[str, Any] = {
            "url": repo_url,
            "to_path": str(target_path),
        }
        if self.clone_depth > 0:
            clone_kwargs["depth"] = self.clone_depth

        def _clone() -> Repo:
            return Repo.clone_from(**clone_kwargs)

        def _discard() -> None:
            shutil.rmtree(target_path, ignore_errors=True)

        try:
            repo = self._retry_operation(_clone, cleanup=_discard)
        except GitError as e:
            raise GitError(
                "Git clone failed",
                repo_url=repo_url,
                repo_path=str(target_path),
                details=e.details,
            ) from e

        logger.info(f"Successfully cloned {repo_url}")
        return repo

    def pull(self, path: Path) -> Repo:
        """Pull the latest changes for the checked out branch.

        Args:
            path: Repository path.

        Returns:
            The updated Repo.

        Raises:
            GitError: If the repository cannot be opened or the pull fails.
        """
        repo = self.open_repo(path)
        logger.info(f"Pulling latest changes in {path}")

        try:
            origin = repo.remote(name="origin")
        except ValueError as e:
            raise GitError(
                "Git pull failed: no origin remote",
                repo_path=str(path),
                details={"error": str(e)},
            ) from e

        try:
            self._retry_operation(origin.pull)
        except GitError as e:
            raise GitError(
                "Git pull failed",
                repo_path=str(path),
                details=e.details,
            ) from e

        return repo

    def get_commit_info(self, repo: Repo) -> dict:
        """Get current commit information.

        Args:
            repo: Repo object.

        Returns:
            Dictionary with commit information. ``sha`` and ``short_sha`` are
            None when the repository has no commits yet.
        """
        try:
            commit = repo.head.commit
        except ValueError:
            logger.warning(f"No commits in {repo.working_dir}")
            return {"sha": None, "short_sha": None, "message": "", "author": ""}

        return {
            "sha": commit.hexsha,
            "short_sha": commit.hexsha[:8],
            "message": commit.message.strip() if commit.message else "",
            "author": str(commit.author) if commit.author else "",
        }

    def describe_version(self, repo: Repo) -> str | None:
        """Return the nearest tag reachable from HEAD, if any."""
        try:
            return repo.git.describe("--tags", "--abbrev=0")
        except GitCommandError:
            return None

    def open_repo(self, path: Path) -> Repo:
        """Open an existing Git repository.

        Args:
            path: Path to the repository.

        Returns:
            Repo object.

        Raises:
            GitError: If repository cannot be opened.
        """
        try:
            return Repo(path)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise GitError(
                f"Not a valid Git repository: {path}",
                repo_path=str(path),
                details={"error": str(e)},
            ) from e
