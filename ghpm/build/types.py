"""Shared types for the build engine.

Every stage of the install pipeline speaks in these records: the detector
yields an ``EcosystemTag``, strategies describe ``BuildAttempt`` chains,
the executor returns a ``BuildOutcome``, the resolver produces
``BinaryCandidate`` paths and the linker records ``LinkRecord`` entries.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class EcosystemTag(str, Enum):
    """Build ecosystem a repository belongs to.

    Values are the strings stored in manifest records.
    """

    GO = "Go"
    RUST = "Rust"
    NODEJS = "Node"
    PYTHON = "Python"
    RUBY = "Ruby"
    CCPP = "C/C++"
    SHELL = "Shell"
    UNKNOWN = "Unknown"

    @classmethod
    def from_value(cls, value: str | None) -> "EcosystemTag":
        """Parse a stored tag, falling back to UNKNOWN."""
        for tag in cls:
            if value in (tag.value, tag.name):
                return tag
        return cls.UNKNOWN


class WorkingDir(str, Enum):
    """Where a build command runs, relative to the repository."""

    REPO_ROOT = "repo-root"
    BUILD_SUBDIR = "repo-root/build"

    def resolve(self, repo_root: Path) -> Path:
        if self is WorkingDir.BUILD_SUBDIR:
            return repo_root / "build"
        return repo_root


class PipelineStage(str, Enum):
    """Stages of a single install or update run."""

    DETECTING = "detecting"
    BUILDING = "building"
    RESOLVING = "resolving"
    LINKING = "linking"
    DONE = "done"


@dataclass(frozen=True)
class BuildStep:
    """A follow-up command run after an attempt's main command.

    Attributes:
        command: Argument tokens.
        working_dir: Where the command runs.
        optional: When True a failure is logged but does not fail the attempt.
    """

    command: tuple[str, ...]
    working_dir: WorkingDir = WorkingDir.REPO_ROOT
    optional: bool = False


@dataclass(frozen=True)
class BuildAttempt:
    """One candidate way of building a repository.

    Attributes:
        tool_required: Executable that must be on PATH before running.
        command: Argument tokens of the main command.
        working_dir: Where the main command runs.
        description: Human readable summary, recorded on success.
        follow_ups: Commands run in order after the main command succeeds.
        extra_tools: Further executables the follow-ups need on PATH.
        alternative: When the tool is missing, move on to the next attempt
            instead of aborting. Once an alternative runs its result is final.
    """

    tool_required: str
    command: tuple[str, ...]
    description: str
    working_dir: WorkingDir = WorkingDir.REPO_ROOT
    follow_ups: tuple[BuildStep, ...] = ()
    extra_tools: tuple[str, ...] = ()
    alternative: bool = False

    def required_tools(self) -> tuple[str, ...]:
        """Return every tool the attempt needs, main tool first."""
        return (self.tool_required, *self.extra_tools)

    def steps(self) -> tuple[BuildStep, ...]:
        """Return the main command followed by every follow-up."""
        return (BuildStep(self.command, self.working_dir), *self.follow_ups)


@dataclass
class BuildOutcome:
    """Result of building one repository.

    Attributes:
        succeeded: Whether an attempt completed successfully.
        attempt_description: Description of the last attempt tried.
        reason: Why the build did not succeed (empty on success).
        halted: True when the pipeline must stop before resolving binaries.
        skipped: True when building was disabled by the caller.
    """

    succeeded: bool
    attempt_description: str = ""
    reason: str = ""
    halted: bool = False
    skipped: bool = False

    @classmethod
    def success(cls, attempt_description: str) -> "BuildOutcome":
        return cls(succeeded=True, attempt_description=attempt_description)

    @classmethod
    def failure(
        cls,
        reason: str,
        attempt_description: str = "",
        halted: bool = False,
    ) -> "BuildOutcome":
        return cls(
            succeeded=False,
            attempt_description=attempt_description,
            reason=reason,
            halted=halted,
        )

    @property
    def recorded_command(self) -> str:
        """Value stored as ``build_cmd`` in the manifest."""
        return self.attempt_description or self.reason

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "succeeded": self.succeeded,
            "attempt_description": self.attempt_description,
            "reason": self.reason,
            "halted": self.halted,
            "skipped": self.skipped,
        }


@dataclass(frozen=True)
class BinaryCandidate:
    """A path believed to be an executable produced by the build.

    Attributes:
        path: Location of the file.
        executable_bit_set: Whether any execute permission bit is set.
        link_name: Name to publish under; defaults to the file name.
    """

    path: Path
    executable_bit_set: bool
    link_name: str | None = None

    @property
    def name(self) -> str:
        return self.link_name or self.path.name


@dataclass(frozen=True)
class LinkRecord:
    """A symlink published into the link directory."""

    source_path: Path
    link_path: Path


@dataclass
class PipelineResult:
    """Everything one pipeline run produced."""

    tag: EcosystemTag
    outcome: BuildOutcome
    links: list[LinkRecord] = field(default_factory=list)
    stage: PipelineStage = PipelineStage.DONE

    @property
    def binaries(self) -> list[str]:
        return [str(record.link_path) for record in self.links]
