"""Ruby gems: nothing to build, executables live under ``bin/``."""

from collections.abc import Iterator
from pathlib import Path

from ghpm.build.strategies.base import BaseStrategy, iter_files
from ghpm.build.types import BuildAttempt, BuildOutcome, EcosystemTag

NO_BUILD_REQUIRED = "no build required"


class RubyStrategy(BaseStrategy):
    """Ruby repositories are usable as cloned."""

    tag = EcosystemTag.RUBY
    description = "Ruby project (Gemfile, *.gemspec)"
    marker_files = ("Gemfile",)
    grants_execute = True

    def detect_applies(self, repo_root: Path) -> bool:
        if super().detect_applies(repo_root):
            return True
        return any(path.suffix == ".gemspec" for path in iter_files((repo_root,)))

    def precheck(self, repo_root: Path) -> BuildOutcome | None:
        # Not a failure: the package is usable, it simply was not built.
        return BuildOutcome.failure(NO_BUILD_REQUIRED)

    def build_attempts(self, repo_root: Path) -> list[BuildAttempt]:
        return []

    def find_binaries(self, repo_root: Path, repo_name: str) -> Iterator[Path]:
        bin_dir = repo_root / "bin"
        named = bin_dir / repo_name
        if named.is_file():
            yield named
            return
        yield from iter_files((bin_dir,))
