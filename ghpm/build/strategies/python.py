"""Python projects installed with pip."""

from collections.abc import Iterator
from pathlib import Path

from ghpm.build.strategies.base import BaseStrategy, scan_for_scripts
from ghpm.build.types import BuildAttempt, EcosystemTag

SCRIPT_SUFFIXES = (".py", ".sh")


class PythonStrategy(BaseStrategy):
    """``pip install .`` with a legacy ``setup.py install`` fallback."""

    tag = EcosystemTag.PYTHON
    description = "Python project (setup.py, pyproject.toml, requirements.txt)"
    marker_files = ("setup.py", "pyproject.toml", "requirements.txt", "setup.cfg")
    grants_execute = True

    def build_attempts(self, repo_root: Path) -> list[BuildAttempt]:
        return [
            BuildAttempt(
                tool_required="pip",
                command=("pip", "install", "."),
                description="pip install .",
            ),
            BuildAttempt(
                tool_required="python3",
                command=("python3", "setup.py", "install"),
                description="python3 setup.py install",
            ),
        ]

    def find_binaries(self, repo_root: Path, repo_name: str) -> Iterator[Path]:
        yield from scan_for_scripts(repo_root, repo_name, SCRIPT_SUFFIXES)
