"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Generator

import pytest
from git import Repo

from ghpm.build.runner import CommandResult
from ghpm.core.config.settings import GitSettings, PathSettings, Settings
from ghpm.store.layout import PackageLayout


class RecordingRunner:
    """CommandRunner that records commands instead of spawning processes."""

    def __init__(self) -> None:
        self.calls: list[tuple[tuple[str, ...], Path]] = []
        self.failing: set[tuple[str, ...]] = set()
        self.on_run: Callable[[tuple[str, ...], Path], None] | None = None

    def fail(self, *commands: Sequence[str]) -> "RecordingRunner":
        """Make the given commands exit non-zero."""
        self.failing.update(tuple(command) for command in commands)
        return self

    def run(self, command: Sequence[str], cwd: Path) -> CommandResult:
        tokens = tuple(command)
        self.calls.append((tokens, Path(cwd)))
        if self.on_run is not None:
            self.on_run(tokens, Path(cwd))
        return CommandResult(command=tokens, return_code=1 if tokens in self.failing else 0)

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [command for command, _ in self.calls]


class ToolSet:
    """Tool availability predicate backed by a fixed set of names."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self.names = set(names)
        self.queries: list[str] = []

    def __call__(self, tool_name: str) -> bool:
        self.queries.append(tool_name)
        return tool_name in self.names


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that is cleaned up after the test.

    Yields:
        Path to the temporary directory.
    """
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def empty_temp_dir(temp_dir: Path) -> Path:
    """Create an empty directory for testing."""
    empty_dir = temp_dir / "empty"
    empty_dir.mkdir()
    return empty_dir


@pytest.fixture
def repo_dir(temp_dir: Path) -> Path:
    """An empty directory standing in for a cloned repository named ``tool``."""
    path = temp_dir / "packages" / "tool"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def link_dir(temp_dir: Path) -> Path:
    """Destination directory for binary symlinks (not created)."""
    return temp_dir / "bin"


@pytest.fixture
def runner() -> RecordingRunner:
    """A fresh recording command runner."""
    return RecordingRunner()


@pytest.fixture
def tools() -> Callable[..., ToolSet]:
    """Factory for tool availability predicates."""
    return ToolSet


@pytest.fixture
def gobin(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``GOBIN`` at a temporary directory."""
    path = temp_dir / "gobin"
    path.mkdir()
    monkeypatch.setenv("GOBIN", str(path))
    return path


@pytest.fixture
def settings(temp_dir: Path) -> Settings:
    """Settings rooted in a temporary directory."""
    return Settings(
        paths=PathSettings(base_dir=temp_dir / "ghpm", bin_dir=temp_dir / "ghpm-bin"),
        git=GitSettings(retry_attempts=1, retry_delay=0),
    )


@pytest.fixture
def layout(settings: Settings) -> PackageLayout:
    """Package layout built from the temporary settings."""
    return PackageLayout.from_settings(settings)


def make_git_repo(path: Path, files: dict[str, str], executable: Iterable[str] = ()) -> Repo:
    """Create a git repository containing ``files`` in one commit."""
    path.mkdir(parents=True)
    repo = Repo.init(path)
    for relative, content in files.items():
        target = path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    for relative in executable:
        (path / relative).chmod(0o755)
    repo.index.add(list(files))
    repo.index.commit("Initial commit")
    return repo


@pytest.fixture
def sample_git_repo(temp_dir: Path) -> Generator[Path, None, None]:
    """Create a sample Git repository for testing.

    Yields:
        Path to the sample Git repository.
    """
    repo_path = temp_dir / "sample_repo"
    repo = make_git_repo(
        repo_path,
        {
            "README.md": "# Sample Repository\n\nThis is a test repository.\n",
            "install.sh": "#!/bin/sh\necho installing\n",
        },
    )
    repo.create_tag("v1.0.0")

    yield repo_path


@pytest.fixture
def git_repo_factory() -> Callable[..., Repo]:
    """Factory creating committed git repositories."""
    return make_git_repo
