"""Installed package data models."""

from datetime import datetime

from pydantic import BaseModel, Field

from ghpm.build.types import EcosystemTag, PipelineResult


class Manifest(BaseModel):
    """Persisted metadata describing one installed package."""

    name: str = Field(description="Package name (the repository name)")
    repo: str = Field(description="owner/repo identifier")
    url: str = Field(description="Clone URL")
    installed_at: datetime = Field(
        default_factory=datetime.now,
        description="Install or last update timestamp",
    )
    commit: str | None = Field(
        default=None,
        description="Commit SHA checked out after clone or pull",
    )
    version: str | None = Field(
        default=None,
        description="Release version, when known",
    )
    language: str | None = Field(
        default=None,
        description="Detected ecosystem tag",
    )
    built: bool = Field(
        default=False,
        description="Whether the last build succeeded",
    )
    build_cmd: str | None = Field(
        default=None,
        description="Description of the winning build attempt",
    )
    build_reason: str | None = Field(
        default=None,
        description="Why the build did not succeed",
    )
    binaries: list[str] = Field(
        default_factory=list,
        description="Symlinks created in the bin directory",
    )

    @property
    def ecosystem(self) -> EcosystemTag:
        return EcosystemTag.from_value(self.language)

    @property
    def status_marker(self) -> str:
        """Short ``[Lang] ✓/✗`` marker, empty when the language is unknown."""
        if not self.language or self.ecosystem is EcosystemTag.UNKNOWN:
            return ""
        return f"[{self.language}] {'✓' if self.built else '✗'}"

    def apply_result(self, result: PipelineResult) -> None:
        """Copy the outcome of a pipeline run into the record."""
        outcome = result.outcome
        self.language = result.tag.value
        self.built = outcome.succeeded
        self.build_cmd = outcome.recorded_command or None
        self.build_reason = outcome.reason or None
        self.binaries = result.binaries
