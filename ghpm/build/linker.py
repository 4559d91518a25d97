"""Publishing resolved binaries into the user's bin directory."""

import os
from collections.abc import Iterable
from pathlib import Path

from ghpm.build.types import BinaryCandidate, LinkRecord
from ghpm.core.logger.logger import get_logger

logger = get_logger(__name__)


def is_on_path(directory: Path, path_env: str | None = None) -> bool:
    """Check whether ``directory`` is one of the PATH entries.

    Segments are compared as text once redundant separators and trailing
    slashes are collapsed. A ``~`` in a segment is not expanded, matching
    how the shell treats a quoted PATH.

    Args:
        directory: Directory to look for.
        path_env: PATH-style string. Uses the process PATH if not provided.

    Returns:
        True if a PATH segment names the same directory.
    """
    if path_env is None:
        path_env = os.environ.get("PATH", "")
    wanted = os.path.normpath(str(directory))
    for segment in path_env.split(os.pathsep):
        if segment and os.path.normpath(segment) == wanted:
            return True
    return False


class BinaryLinker:
    """Creates and refreshes symlinks in the link directory.

    Linking is idempotent: an existing entry at a destination name is
    replaced. Failures are logged per binary and never abort the rest.
    """

    def __init__(self, path_env: str | None = None) -> None:
        """Initialize the linker.

        Args:
            path_env: PATH-style string used for the advisory check. Uses
                the process PATH if not provided.
        """
        self.path_env = path_env
        self._path_warned = False

    def link(
        self,
        candidates: Iterable[BinaryCandidate],
        link_dir: Path,
    ) -> list[LinkRecord]:
        """Symlink every candidate into ``link_dir``.

        Args:
            candidates: Binaries to publish.
            link_dir: Destination directory, created if absent.

        Returns:
            One LinkRecord per link created.
        """
        try:
            link_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create link directory {link_dir}: {e}")
            return []

        records: list[LinkRecord] = []
        seen = 0

        for candidate in candidates:
            seen += 1
            record = self._link_one(candidate, link_dir)
            if record is not None:
                records.append(record)

        if seen == 0:
            logger.warning("No binaries found to link")

        self.check_path(link_dir)
        return records

    def _link_one(self, candidate: BinaryCandidate, link_dir: Path) -> LinkRecord | None:
        source = Path(os.path.abspath(candidate.path))
        destination = link_dir / candidate.name

        try:
            destination.unlink(missing_ok=True)
            destination.symlink_to(source)
        except OSError as e:
            logger.warning(f"Failed to link {candidate.name}: {e}")
            return None

        logger.info(f"Linked {destination} -> {source}")
        return LinkRecord(source_path=source, link_path=destination)

    def check_path(self, link_dir: Path) -> bool:
        """Warn once if ``link_dir`` is not on PATH.

        Advisory only; installation proceeds either way.

        Returns:
            True if the directory is on PATH.
        """
        if is_on_path(link_dir, self.path_env):
            return True
        if not self._path_warned:
            self._path_warned = True
            logger.warning(
                f"{link_dir} is not in your PATH. "
                f'Add it with: export PATH="{link_dir}:$PATH"'
            )
        return False

    def unlink(
        self,
        link_dir: Path,
        target_root: Path,
        recorded: Iterable[Path] = (),
    ) -> list[Path]:
        """Remove links belonging to one package.

        A link is removed when it was recorded for the package or when it
        points inside ``target_root``. Regular files are never touched.

        Args:
            link_dir: Directory holding the links.
            target_root: Package directory whose links should go.
            recorded: Link paths stored in the package's manifest.

        Returns:
            Paths of the links removed.
        """
        doomed: dict[Path, None] = {Path(p): None for p in recorded}

        if link_dir.is_dir():
            root = Path(os.path.abspath(target_root))
            for entry in link_dir.iterdir():
                if not entry.is_symlink():
                    continue
                target = Path(os.path.normpath(link_dir / os.readlink(entry)))
                if target.is_relative_to(root):
                    doomed[entry] = None

        removed: list[Path] = []
        for path in doomed:
            if not path.is_symlink():
                continue
            try:
                path.unlink()
            except OSError as e:
                logger.warning(f"Failed to remove link {path}: {e}")
                continue
            logger.info(f"Removed link {path}")
            removed.append(path)
        return removed
