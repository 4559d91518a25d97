"""Go modules: ``go install`` with a ``go build`` fallback."""

import os
from collections.abc import Iterator
from pathlib import Path

from ghpm.build.strategies.base import BaseStrategy
from ghpm.build.types import BuildAttempt, EcosystemTag


def go_bin_dir() -> Path:
    """Return the directory ``go install`` writes binaries to.

    ``$GOBIN`` wins, then the first ``$GOPATH`` entry's ``bin``, then
    ``~/go/bin``.
    """
    gobin = os.environ.get("GOBIN")
    if gobin:
        return Path(gobin).expanduser()

    gopath = os.environ.get("GOPATH")
    if gopath:
        first = gopath.split(os.pathsep)[0]
        if first:
            return Path(first).expanduser() / "bin"

    return Path.home() / "go" / "bin"


class GoStrategy(BaseStrategy):
    """Builds Go modules with the go toolchain."""

    tag = EcosystemTag.GO
    description = "Go module (go.mod)"
    marker_files = ("go.mod",)

    def build_attempts(self, repo_root: Path) -> list[BuildAttempt]:
        return [
            BuildAttempt(
                tool_required="go",
                command=("go", "install"),
                description="go install",
            ),
            BuildAttempt(
                tool_required="go",
                command=("go", "build"),
                description="go build",
            ),
        ]

    def find_binaries(self, repo_root: Path, repo_name: str) -> Iterator[Path]:
        installed = go_bin_dir() / repo_name
        if installed.is_file():
            yield installed
            return

        local = repo_root / repo_name
        if local.is_file():
            yield local
