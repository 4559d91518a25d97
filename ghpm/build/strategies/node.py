"""Node.js packages installed with npm."""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from ghpm.build.strategies.base import BaseStrategy, scan_for_scripts
from ghpm.build.types import BuildAttempt, EcosystemTag
from ghpm.core.logger.logger import get_logger

logger = get_logger(__name__)

SCRIPT_SUFFIXES = (".js",)


def read_package_json(repo_root: Path) -> dict[str, Any]:
    """Parse ``package.json``; an unreadable manifest is treated as empty."""
    manifest = repo_root / "package.json"
    try:
        data = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.debug(f"Cannot read {manifest}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def command_name(package_name: str) -> str:
    """Strip an npm scope: ``@scope/tool`` becomes ``tool``."""
    return package_name.rsplit("/", 1)[-1]


def declared_bins(package: dict[str, Any]) -> dict[str, str]:
    """Return the ``bin`` field as a command-name to path mapping.

    ``bin`` may be a single path, in which case the command is named after
    the package, or an object mapping command names to paths.
    """
    bin_field = package.get("bin")
    if isinstance(bin_field, str):
        name = package.get("name")
        if isinstance(name, str) and name:
            return {command_name(name): bin_field}
        return {Path(bin_field).name: bin_field}
    if isinstance(bin_field, dict):
        return {
            str(name): path
            for name, path in bin_field.items()
            if isinstance(path, str)
        }
    return {}


class NodeStrategy(BaseStrategy):
    """Installs dependencies with npm and links declared executables."""

    tag = EcosystemTag.NODEJS
    description = "Node.js package (package.json)"
    marker_files = ("package.json",)
    grants_execute = True

    def build_attempts(self, repo_root: Path) -> list[BuildAttempt]:
        return [
            BuildAttempt(
                tool_required="npm",
                command=("npm", "install"),
                description="npm install",
            ),
        ]

    def named_binaries(
        self,
        repo_root: Path,
        repo_name: str,
    ) -> Iterator[tuple[str, Path]]:
        root = repo_root.resolve()
        for name, relative in declared_bins(read_package_json(repo_root)).items():
            path = repo_root / relative
            if not path.resolve().is_relative_to(root):
                logger.warning(
                    f"package.json bin '{name}' points outside the repository: {relative}"
                )
                continue
            if path.is_file():
                yield name, path
            else:
                logger.debug(f"package.json bin '{name}' points at missing {path}")

    def find_binaries(self, repo_root: Path, repo_name: str) -> Iterator[Path]:
        yield from scan_for_scripts(repo_root, repo_name, SCRIPT_SUFFIXES)
