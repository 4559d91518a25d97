"""Filesystem layout for installed packages."""

import os
from dataclasses import dataclass
from pathlib import Path

from ghpm.core.config.settings import Settings, get_settings
from ghpm.core.exceptions import ConfigurationError, PackageError
from ghpm.core.logger.logger import get_logger

logger = get_logger(__name__)


def validate_package_name(name: str) -> str:
    """Reject names that would escape the packages or manifests directory.

    Returns:
        ``name`` unchanged.

    Raises:
        PackageError: If ``name`` is empty, ``.``, ``..`` or contains a path
            separator.
    """
    separators = {sep for sep in (os.sep, os.altsep, "/") if sep}
    if name in ("", ".", "..") or any(sep in name for sep in separators):
        raise PackageError(f"Invalid package name: {name!r}", package_name=name or None)
    return name


@dataclass(frozen=True)
class PackageLayout:
    """Directories ghpm reads and writes.

    Attributes:
        base_dir: Root holding ``packages/`` and ``manifests/``.
        bin_dir: Directory receiving binary symlinks.
    """

    base_dir: Path
    bin_dir: Path

    @property
    def packages_dir(self) -> Path:
        return self.base_dir / "packages"

    @property
    def manifests_dir(self) -> Path:
        return self.base_dir / "manifests"

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "PackageLayout":
        """Build the layout from application settings."""
        settings = settings or get_settings()
        return cls(base_dir=settings.paths.base_dir, bin_dir=settings.paths.bin_dir)

    def ensure(self) -> "PackageLayout":
        """Create every directory of the layout.

        Raises:
            ConfigurationError: If a directory cannot be created.
        """
        for directory in (self.packages_dir, self.manifests_dir, self.bin_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ConfigurationError(
                    f"Failed to init directories: {directory}",
                    config_key="paths",
                    details={"error": str(e)},
                ) from e
        logger.debug(f"Using base directory {self.base_dir}")
        return self

    def package_path(self, name: str) -> Path:
        """Return the checkout directory of package ``name``.

        Raises:
            PackageError: If ``name`` is not a single path component.
        """
        return self.packages_dir / validate_package_name(name)

    def manifest_path(self, name: str) -> Path:
        """Return the manifest file of package ``name``.

        Raises:
            PackageError: If ``name`` is not a single path component.
        """
        return self.manifests_dir / f"{validate_package_name(name)}.json"
