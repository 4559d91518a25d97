"""Tests for repository and package models."""

from pathlib import Path

import pytest

from ghpm.build.types import BuildOutcome, EcosystemTag, LinkRecord, PipelineResult
from ghpm.core.exceptions import PackageError
from ghpm.models.package import Manifest
from ghpm.models.repository import RepoSearchItem, RepoSpec


class TestRepoSpec:
    """Tests for RepoSpec parsing."""

    @pytest.mark.parametrize(
        "value",
        [
            "junegunn/fzf",
            "https://github.com/junegunn/fzf",
            "https://github.com/junegunn/fzf.git",
            "https://github.com/junegunn/fzf/",
            "github.com/junegunn/fzf",
            "  junegunn/fzf  ",
        ],
    )
    def test_parse(self, value: str) -> None:
        """Test accepted repository references."""
        spec = RepoSpec.parse(value)
        assert spec.owner == "junegunn"
        assert spec.repo == "fzf"

    def test_derived_values(self) -> None:
        """Test the name, full name and clone URL."""
        spec = RepoSpec.parse("sharkdp/bat")
        assert spec.name == "bat"
        assert spec.full_name == "sharkdp/bat"
        assert spec.clone_url == "https://github.com/sharkdp/bat.git"
        assert str(spec) == "sharkdp/bat"

    def test_dotted_names(self) -> None:
        """Test dots and dashes in names."""
        spec = RepoSpec.parse("some-org/tool.nvim")
        assert spec.repo == "tool.nvim"

    @pytest.mark.parametrize("value", ["fzf", "a/b/c", "/fzf", "owner/", ""])
    def test_invalid(self, value: str) -> None:
        """Test rejected references."""
        with pytest.raises(PackageError, match="Invalid repo format"):
            RepoSpec.parse(value)

    def test_looks_like_spec(self) -> None:
        """Test search terms are told apart from repositories."""
        assert RepoSpec.looks_like_spec("owner/repo") is True
        assert RepoSpec.looks_like_spec("fuzzy finder") is False


class TestRepoSearchItem:
    """Tests for RepoSearchItem."""

    def test_ignores_extra_fields(self) -> None:
        """Test unknown API fields are dropped."""
        item = RepoSearchItem.model_validate({"full_name": "a/b", "forks": 1})
        assert item.full_name == "a/b"
        assert item.language_label == "Unknown"


class TestManifest:
    """Tests for Manifest."""

    def make(self, **fields) -> Manifest:
        return Manifest(name="fzf", repo="junegunn/fzf", url="u", **fields)

    def test_status_marker(self) -> None:
        """Test the list marker for built and unbuilt packages."""
        assert self.make(language="Go", built=True).status_marker == "[Go] ✓"
        assert self.make(language="Rust", built=False).status_marker == "[Rust] ✗"
        assert self.make(language="Unknown").status_marker == ""
        assert self.make().status_marker == ""

    def test_ecosystem(self) -> None:
        """Test the stored language maps back to a tag."""
        assert self.make(language="C/C++").ecosystem is EcosystemTag.CCPP

    def test_apply_result(self) -> None:
        """Test pipeline results are copied into the record."""
        manifest = self.make()
        result = PipelineResult(
            tag=EcosystemTag.CCPP,
            outcome=BuildOutcome.success("make && make install"),
            links=[LinkRecord(Path("/p/fzf/fzf"), Path("/bin/fzf"))],
        )

        manifest.apply_result(result)

        assert manifest.language == "C/C++"
        assert manifest.built is True
        assert manifest.build_cmd == "make && make install"
        assert manifest.build_reason is None
        assert manifest.binaries == ["/bin/fzf"]

    def test_apply_failed_result(self) -> None:
        """Test a failure records its reason."""
        manifest = self.make()
        result = PipelineResult(
            tag=EcosystemTag.UNKNOWN,
            outcome=BuildOutcome.failure("unknown language", halted=True),
        )

        manifest.apply_result(result)

        assert manifest.built is False
        assert manifest.build_cmd == "unknown language"
        assert manifest.build_reason == "unknown language"
        assert manifest.binaries == []
