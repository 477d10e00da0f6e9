"""Settings models for the uikit bundler.

This module defines the configuration structure for the bundler and the
daemon that serves component bundles.

Contract:
- Inputs: Environment variables, YAML files
- Outputs: Validated settings objects
- Side Effects: None (read-only)
"""

from pathlib import Path

from pydantic import AliasChoices
from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from ..models.bundles import ProcessMode


class BundlerSettings(BaseSettings):
    """Configuration for the uikit bundler and daemon.

    Attributes:
        host: Listen address (default: 127.0.0.1)
        port: Listen port (default: 8430)
        log_level: Logging level (default: info)
        workers: Number of workers (default: 1)
        cors_origins: Origins allowed to fetch bundles (default: all)
        mode: Process mode; anything but "production" means development
        esbuild_binary: Name or path of the native esbuild executable
        target: Syntax level bundles are compiled down to
        components_dir: Directory relative entry paths are resolved against
        components: Component name -> entry path registrations

    Example:
        >>> settings = BundlerSettings()
        >>> assert settings.mode is ProcessMode.DEVELOPMENT
        >>> assert settings.target == "es2020"
    """

    model_config = SettingsConfigDict(
        env_prefix="UIKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    host: str = "127.0.0.1"
    port: int = 8430
    log_level: str = "info"
    workers: int = 1
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # NODE_ENV is honored so existing deployments keep their mode switch
    mode: ProcessMode = Field(
        default=ProcessMode.DEVELOPMENT,
        validation_alias=AliasChoices("UIKIT_MODE", "NODE_ENV"),
    )

    esbuild_binary: str = "esbuild"
    target: str = "es2020"

    components_dir: str = "."
    components: dict[str, str] = Field(default_factory=dict)

    @field_validator("mode", mode="before")
    @classmethod
    def normalize_mode(cls, v: object) -> ProcessMode:
        """Map any value other than "production" to development.

        Args:
            v: Raw mode value (string or ProcessMode)

        Returns:
            Normalized ProcessMode
        """
        if isinstance(v, ProcessMode):
            return v
        if str(v).strip().lower() == ProcessMode.PRODUCTION.value:
            return ProcessMode.PRODUCTION
        return ProcessMode.DEVELOPMENT

    @field_validator("components_dir")
    @classmethod
    def expand_and_resolve_path(cls, v: str) -> str:
        """Expand ~ and resolve to absolute path.

        Args:
            v: Path string (may contain ~ or be relative)

        Returns:
            Absolute path as string
        """
        return str(Path(v).expanduser().resolve())
