"""JSON manifest persistence, one file per installed package."""

import json
from pathlib import Path

from pydantic import ValidationError

from ghpm.core.exceptions import ManifestError
from ghpm.core.logger.logger import get_logger
from ghpm.models.package import Manifest
from ghpm.store.layout import PackageLayout

logger = get_logger(__name__)


class ManifestStore:
    """Reads and writes ``manifests/<name>.json`` records.

    No locking is done; concurrent writers to the same package race and
    the last write wins.
    """

    def __init__(self, layout: PackageLayout) -> None:
        self.layout = layout

    def exists(self, name: str) -> bool:
        return self.layout.manifest_path(name).is_file()

    def read(self, name: str) -> Manifest:
        """Load a package's manifest.

        Args:
            name: Package name.

        Returns:
            The parsed Manifest.

        Raises:
            ManifestError: If the record is missing or cannot be parsed.
        """
        path = self.layout.manifest_path(name)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ManifestError(
                f"Package not found: {name}",
                manifest_path=str(path),
            ) from e
        except (OSError, json.JSONDecodeError) as e:
            raise ManifestError(
                f"Failed to read manifest for {name}",
                manifest_path=str(path),
                details={"error": str(e)},
            ) from e

        try:
            return Manifest.model_validate(data)
        except ValidationError as e:
            raise ManifestError(
                f"Failed to parse manifest for {name}",
                manifest_path=str(path),
                details={"error": str(e)},
            ) from e

    def write(self, manifest: Manifest) -> Path:
        """Save a manifest, replacing any previous record.

        Returns:
            Path of the written file.

        Raises:
            ManifestError: If the file cannot be written.
        """
        path = self.layout.manifest_path(manifest.name)
        payload = manifest.model_dump(mode="json")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            raise ManifestError(
                f"Failed to write manifest for {manifest.name}",
                manifest_path=str(path),
                details={"error": str(e)},
            ) from e
        logger.debug(f"Saved manifest {path}")
        return path

    def delete(self, name: str) -> bool:
        """Remove a manifest.

        Returns:
            True if a record was deleted.
        """
        path = self.layout.manifest_path(name)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise ManifestError(
                f"Failed to delete manifest for {name}",
                manifest_path=str(path),
                details={"error": str(e)},
            ) from e
        return True

    def list_all(self) -> list[Manifest]:
        """Load every manifest, sorted by package name.

        Unreadable records are logged and skipped.
        """
        directory = self.layout.manifests_dir
        if not directory.is_dir():
            return []

        manifests: list[Manifest] = []
        for path in sorted(directory.glob("*.json")):
            try:
                manifests.append(self.read(path.stem))
            except ManifestError as e:
                logger.warning(f"Skipping unreadable manifest {path.name}: {e.message}")
        return sorted(manifests, key=lambda m: m.name)
