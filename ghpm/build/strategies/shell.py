"""Repositories that ship an install script."""

from collections.abc import Iterator
from pathlib import Path

from ghpm.build.strategies.base import (
    BaseStrategy,
    iter_files,
    make_executable,
    scan_for_scripts,
)
from ghpm.build.types import BuildAttempt, BuildOutcome, EcosystemTag

SCRIPT_SUFFIXES = (".sh",)
NO_INSTALL_SCRIPT = "no install script found"


def find_install_script(repo_root: Path) -> Path | None:
    """Return the first top-level ``*.sh`` file whose name mentions install."""
    for path in iter_files((repo_root,)):
        if "install" in path.name.lower() and path.name.endswith(".sh"):
            return path
    return None


class ShellStrategy(BaseStrategy):
    """Runs the repository's own install script through ``sh``."""

    tag = EcosystemTag.SHELL
    description = "Shell install script (*install*.sh)"
    grants_execute = True

    def detect_applies(self, repo_root: Path) -> bool:
        return find_install_script(repo_root) is not None

    def precheck(self, repo_root: Path) -> BuildOutcome | None:
        script = find_install_script(repo_root)
        if script is None:
            return BuildOutcome.failure(NO_INSTALL_SCRIPT, halted=True)
        if not make_executable(script):
            return BuildOutcome.failure(
                f"cannot make {script.name} executable",
                attempt_description=f"chmod +x {script.name}",
                halted=True,
            )
        return None

    def build_attempts(self, repo_root: Path) -> list[BuildAttempt]:
        script = find_install_script(repo_root)
        if script is None:
            return []
        return [
            BuildAttempt(
                tool_required="sh",
                command=("sh", str(script)),
                description=f"./{script.name}",
            ),
        ]

    def find_binaries(self, repo_root: Path, repo_name: str) -> Iterator[Path]:
        yield from scan_for_scripts(repo_root, repo_name, SCRIPT_SUFFIXES)
