"""Rust crates built with cargo."""

from collections.abc import Iterator
from pathlib import Path

from ghpm.build.strategies.base import BaseStrategy
from ghpm.build.types import BuildAttempt, EcosystemTag

RELEASE_DIR = Path("target") / "release"


class RustStrategy(BaseStrategy):
    """Installs crates with ``cargo install``, falling back to a release build."""

    tag = EcosystemTag.RUST
    description = "Rust crate (Cargo.toml)"
    marker_files = ("Cargo.toml",)

    def build_attempts(self, repo_root: Path) -> list[BuildAttempt]:
        return [
            BuildAttempt(
                tool_required="cargo",
                command=("cargo", "install", "--path", "."),
                description="cargo install --path .",
            ),
            BuildAttempt(
                tool_required="cargo",
                command=("cargo", "build", "--release"),
                description="cargo build --release",
            ),
        ]

    def find_binaries(self, repo_root: Path, repo_name: str) -> Iterator[Path]:
        release_binary = repo_root / RELEASE_DIR / repo_name
        if release_binary.is_file():
            yield release_binary
