"""Package lifecycle: install, remove, list, update, info and search."""

import shutil
from datetime import datetime
from pathlib import Path

from git import Repo

from ghpm.build.linker import BinaryLinker
from ghpm.build.pipeline import BuildPipeline
from ghpm.build.runner import SubprocessRunner
from ghpm.build.types import PipelineResult
from ghpm.core.config.settings import Settings, get_settings
from ghpm.core.exceptions import ManifestError, PackageError
from ghpm.core.logger.logger import get_logger
from ghpm.models.package import Manifest
from ghpm.models.repository import RepoSearchItem, RepoSpec
from ghpm.sources.git_operations import GitOperations
from ghpm.sources.github_search import GitHubSearchClient
from ghpm.store.layout import PackageLayout
from ghpm.store.manifests import ManifestStore

logger = get_logger(__name__)


class PackageManager:
    """Coordinates git, the build pipeline and manifest storage.

    Operations on the same package are not guarded by any lock.
    """

    def __init__(
        self,
        layout: PackageLayout | None = None,
        settings: Settings | None = None,
        git: GitOperations | None = None,
        pipeline: BuildPipeline | None = None,
        search_client: GitHubSearchClient | None = None,
        linker: BinaryLinker | None = None,
    ) -> None:
        """Initialize the package manager.

        Args:
            layout: Directory layout. Built from settings if not provided.
            settings: Application settings. Uses global settings if not provided.
            git: Git wrapper used for clone and pull.
            pipeline: Build pipeline run after clone and pull.
            search_client: GitHub search client.
            linker: Linker shared by the pipeline and ``remove``.
        """
        self.settings = settings or get_settings()
        self.layout = layout or PackageLayout.from_settings(self.settings)
        self.store = ManifestStore(self.layout)
        self.linker = linker or BinaryLinker()
        self.git = git or GitOperations(
            retry_attempts=self.settings.git.retry_attempts,
            retry_delay=self.settings.git.retry_delay,
            clone_depth=self.settings.git.clone_depth,
        )
        self.pipeline = pipeline or BuildPipeline(
            runner=SubprocessRunner(timeout=self.settings.build.timeout),
            linker=self.linker,
        )
        self._search_client = search_client

    @property
    def search_client(self) -> GitHubSearchClient:
        if self._search_client is None:
            self._search_client = GitHubSearchClient(self.settings.github)
        return self._search_client

    def is_installed(self, name: str) -> bool:
        return self.layout.package_path(name).exists()

    def install(self, repo: RepoSpec | str, no_build: bool = False) -> Manifest:
        """Clone, build and link a repository.

        Build problems never fail the install; they are recorded in the
        manifest instead.

        Args:
            repo: ``owner/repo``, a GitHub URL or a parsed RepoSpec.
            no_build: Skip every build attempt.

        Returns:
            The saved manifest.

        Raises:
            PackageError: If the repository reference is invalid or the package exists.
            GitError: If the clone fails.
        """
        spec = repo if isinstance(repo, RepoSpec) else RepoSpec.parse(repo)
        self.layout.ensure()

        dest = self.layout.package_path(spec.name)
        if dest.exists():
            raise PackageError(f"Already installed: {spec.name}", package_name=spec.name)

        cloned = self.git.clone(spec.clone_url, dest)
        result = self._run_pipeline(dest, spec.name, no_build)

        manifest = Manifest(name=spec.name, repo=spec.full_name, url=spec.clone_url)
        self._record(manifest, cloned, result)
        self.store.write(manifest)

        logger.info(f"Installed {spec.name}")
        return manifest

    def remove(self, name: str) -> list[Path]:
        """Delete a package, its links and its manifest.

        Returns:
            Links that were removed.

        Raises:
            PackageError: If the name is invalid, the package is not installed
                or it cannot be deleted.
        """
        pkg_path = self.layout.package_path(name)
        if not pkg_path.exists():
            raise PackageError(f"Repo not installed: {name}", package_name=name)

        recorded: list[str] = []
        try:
            recorded = self.store.read(name).binaries
        except ManifestError as e:
            logger.warning(f"Removing {name} without its manifest: {e.message}")

        removed = self.linker.unlink(
            self.layout.bin_dir,
            pkg_path,
            recorded=[Path(p) for p in recorded],
        )

        try:
            shutil.rmtree(pkg_path)
        except OSError as e:
            raise PackageError(
                f"Failed to remove {pkg_path}",
                package_name=name,
                details={"error": str(e)},
            ) from e

        self.store.delete(name)
        logger.info(f"Removed {name}")
        return removed

    def list_packages(self) -> list[Manifest]:
        """Return every installed package's manifest, sorted by name."""
        return self.store.list_all()

    def update(self, name: str, no_build: bool = False) -> Manifest:
        """Pull the latest changes and rebuild.

        The ecosystem is detected again and the build re-run every time.

        Raises:
            PackageError: If the name is invalid or the package is not installed.
            ManifestError: If the manifest is missing or corrupt.
            GitError: If the pull fails.
        """
        pkg_path = self.layout.package_path(name)
        if not pkg_path.exists():
            raise PackageError(f"Package not installed: {name}", package_name=name)

        manifest = self.store.read(name)
        logger.info(f"Updating {name}...")

        pulled = self.git.pull(pkg_path)
        result = self._run_pipeline(pkg_path, name, no_build)

        self._record(manifest, pulled, result)
        manifest.installed_at = datetime.now()
        self.store.write(manifest)

        logger.info(f"Updated {name}")
        return manifest

    def info(self, name: str) -> Manifest:
        """Return a package's manifest.

        Raises:
            PackageError: If the name is invalid.
            ManifestError: If no manifest exists for ``name``.
        """
        return self.store.read(name)

    def location(self, name: str) -> Path | None:
        """Return the package directory if it exists."""
        path = self.layout.package_path(name)
        return path if path.exists() else None

    def search(self, query: str, limit: int | None = None) -> list[RepoSearchItem]:
        """Search GitHub repositories.

        Raises:
            SearchError: If the API call fails.
        """
        return self.search_client.search(query, per_page=limit)

    def _run_pipeline(self, repo_root: Path, name: str, no_build: bool) -> PipelineResult:
        result = self.pipeline.run(
            repo_root,
            name,
            self.layout.bin_dir,
            no_build=no_build,
        )
        logger.debug(f"Build outcome for {name}: {result.outcome.to_dict()}")
        return result

    def _record(self, manifest: Manifest, repo: Repo, result: PipelineResult) -> None:
        manifest.apply_result(result)
        manifest.commit = self.git.get_commit_info(repo)["sha"]
        manifest.version = self.git.describe_version(repo)
