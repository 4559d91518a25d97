"""Command execution abstraction for build steps.

Build commands stream their output straight to the user's terminal; the
only thing ghpm observes is whether the process exited successfully.
Executors depend on the ``CommandRunner`` protocol so tests can replace
process spawning with a recording fake.
"""

import subprocess
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from ghpm.core.logger.logger import get_logger

logger = get_logger(__name__)


@dataclass
class CommandResult:
    """Result of running one command.

    Attributes:
        command: The argument tokens that were executed.
        return_code: Exit code, or -1 when the process could not be spawned
            or timed out.
        duration_seconds: Wall-clock time taken.
        error_message: Spawn or timeout error, if any.
        stdout: Captured standard output (only when capture was requested).
        stderr: Captured standard error (only when capture was requested).
    """

    command: tuple[str, ...]
    return_code: int = 0
    duration_seconds: float = 0.0
    error_message: str | None = None
    stdout: str | None = None
    stderr: str | None = None

    @property
    def success(self) -> bool:
        return self.return_code == 0 and self.error_message is None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "command": " ".join(self.command),
            "return_code": self.return_code,
            "duration_seconds": self.duration_seconds,
            "error_message": self.error_message,
        }


class CommandRunner(Protocol):
    """Anything able to run a command in a working directory."""

    def run(self, command: Sequence[str], cwd: Path) -> CommandResult:
        """Run ``command`` in ``cwd`` and report how it exited."""
        ...


class SubprocessRunner:
    """Runs commands as child processes, one at a time."""

    def __init__(
        self,
        timeout: int | None = None,
        capture_output: bool = False,
    ) -> None:
        """Initialize the runner.

        Args:
            timeout: Maximum seconds per command; None waits indefinitely.
            capture_output: Capture stdout/stderr instead of inheriting the
                parent's streams.
        """
        self.timeout = timeout
        self.capture_output = capture_output

    def run(self, command: Sequence[str], cwd: Path) -> CommandResult:
        """Run a command and wait for it to exit.

        Args:
            command: Argument tokens; the first token is the executable.
            cwd: Working directory.

        Returns:
            CommandResult describing the exit status.
        """
        tokens = tuple(command)
        logger.debug(f"Running {' '.join(tokens)} in {cwd}")
        start_time = time.time()

        try:
            completed = subprocess.run(
                tokens,
                cwd=cwd,
                check=False,
                timeout=self.timeout,
                capture_output=self.capture_output,
                text=True if self.capture_output else None,
            )
        except subprocess.TimeoutExpired:
            return CommandResult(
                command=tokens,
                return_code=-1,
                duration_seconds=time.time() - start_time,
                error_message=f"Command timed out after {self.timeout} seconds",
            )
        except OSError as e:
            return CommandResult(
                command=tokens,
                return_code=-1,
                duration_seconds=time.time() - start_time,
                error_message=str(e),
            )

        return CommandResult(
            command=tokens,
            return_code=completed.returncode,
            duration_seconds=time.time() - start_time,
            stdout=completed.stdout if self.capture_output else None,
            stderr=completed.stderr if self.capture_output else None,
        )
