"""Application settings using Pydantic Settings."""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ghpm.core.config.loader import ConfigLoader
from ghpm.core.exceptions.errors import ConfigurationError

DEFAULT_CONFIG_PATH = Path.home() / ".ghpm" / "config.yaml"


class PathSettings(BaseSettings):
    """Filesystem layout settings."""

    model_config = SettingsConfigDict(
        env_prefix="GHPM_PATHS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_dir: Path = Field(
        default_factory=lambda: Path.home() / ".ghpm",
        description="Directory holding packages/ and manifests/",
    )
    bin_dir: Path = Field(
        default_factory=lambda: Path.home() / ".local" / "bin",
        description="Directory receiving one symlink per discovered executable",
    )

    @field_validator("base_dir", "bin_dir", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Expand ``~`` in configured paths."""
        return Path(v).expanduser()


class GitSettings(BaseSettings):
    """Git operation configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="GHPM_GIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    clone_depth: int = Field(
        default=0,
        ge=0,
        description="Clone depth (0 = full)",
    )
    retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Retry attempts for network operations",
    )
    retry_delay: int = Field(
        default=2,
        ge=0,
        le=60,
        description="Retry delay in seconds",
    )


class GitHubSettings(BaseSettings):
    """GitHub search API settings."""

    model_config = SettingsConfigDict(
        env_prefix="GHPM_GITHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_base: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL",
    )
    token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("token", "GHPM_GITHUB_TOKEN", "GITHUB_TOKEN"),
        description="Optional token for higher search rate limits",
    )
    per_page: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Search results shown per query",
    )
    timeout: float = Field(
        default=15.0,
        gt=0,
        description="HTTP timeout in seconds",
    )


class BuildSettings(BaseSettings):
    """Build execution settings."""

    model_config = SettingsConfigDict(
        env_prefix="GHPM_BUILD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    timeout: int | None = Field(
        default=None,
        ge=1,
        description="Per-command timeout in seconds (unset = wait forever)",
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="GHPM_LOGGING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = Field(
        default="INFO",
        description="Log level",
    )
    format: str = Field(
        default="[%(name)s] %(message)s",
        description="Log format string",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path",
    )
    use_rich: bool = Field(
        default=True,
        description="Use Rich console for output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("file", mode="before")
    @classmethod
    def validate_file(cls, v: str | None) -> Path | None:
        """Validate and convert file to Path."""
        if v is None or v == "":
            return None
        return Path(v).expanduser()


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="GHPM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    paths: PathSettings = Field(default_factory=PathSettings)
    git: GitSettings = Field(default_factory=GitSettings)
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    build: BuildSettings = Field(default_factory=BuildSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file.

        Values present in the file take precedence over environment
        variables; absent keys fall back to the environment and defaults.

        Args:
            path: Path to YAML configuration file.

        Returns:
            Settings instance with values from YAML.
        """
        loader = ConfigLoader(path)
        loader.load()

        return cls(
            paths=PathSettings(**loader.get_section("paths")),
            git=GitSettings(**loader.get_section("git")),
            github=GitHubSettings(**loader.get_section("github")),
            build=BuildSettings(**loader.get_section("build")),
            logging=LoggingSettings(**loader.get_section("logging")),
        )

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from default locations.

        ``$GHPM_CONFIG`` names an explicit YAML file; otherwise
        ``~/.ghpm/config.yaml`` is used when it exists.

        Returns:
            Settings instance.

        Raises:
            ConfigurationError: If the file cannot be read or a value from the
                file or the environment is invalid.
        """
        explicit = os.environ.get("GHPM_CONFIG")
        config_path = Path(explicit).expanduser() if explicit else DEFAULT_CONFIG_PATH

        try:
            if explicit or DEFAULT_CONFIG_PATH.exists():
                return cls.from_yaml(config_path)

            # Environment variables and .env are automatically loaded by pydantic-settings
            return cls()
        except ValidationError as e:
            problems = [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise ConfigurationError(
                f"Invalid configuration: {'; '.join(problems)}",
                details={"error_count": e.error_count()},
            ) from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings singleton.
    """
    return Settings.load()
