"""Configuration loading for the uikit bundler.

This module handles loading bundler configuration from YAML files
and environment variables.

Contract:
- Inputs: Config file paths, environment variables
- Outputs: BundlerSettings objects
- Side Effects: Creates default config file if missing
"""

import logging
import os
from pathlib import Path

import yaml

from ..storage.paths import get_config_dir
from .settings import BundlerSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = """# uikit bundler configuration

# Server settings
host: "127.0.0.1"
port: 8430
log_level: "info"
workers: 1

# Build mode: "production" (minified, cached) or "development" (readable, rebuilt every call)
# Can be overridden with UIKIT_MODE or NODE_ENV
# mode: "development"

# Native compiler executable (falls back to the in-process backend when unusable)
# esbuild_binary: "esbuild"
# target: "es2020"

# Components are registered once at startup; entry paths are resolved against components_dir
# components_dir: "."
# components:
#   weather-dashboard: "components/index.jsx"
"""

# Settings whose environment variable is not simply UIKIT_<KEY>
_ENV_ALIASES: dict[str, tuple[str, ...]] = {
    "mode": ("UIKIT_MODE", "NODE_ENV"),
}


def get_config_path() -> Path:
    """Get path to config file.

    Returns:
        Path to bundler.yaml in config directory

    Example:
        >>> config_path = get_config_path()
        >>> assert config_path.name == "bundler.yaml"
    """
    return get_config_dir() / "bundler.yaml"


def create_default_config() -> None:
    """Create default config file if it doesn't exist.

    Example:
        >>> create_default_config()
        >>> assert get_config_path().exists()
    """
    config_path = get_config_path()

    if config_path.exists():
        logger.debug(f"Config file already exists: {config_path}")
        return

    config_path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    logger.info(f"Created default config: {config_path}")


def _env_keys(key: str) -> tuple[str, ...]:
    return _ENV_ALIASES.get(key, (f"UIKIT_{key.upper()}",))


def load_config(config_path: Path | None = None) -> BundlerSettings:
    """Load bundler configuration from YAML and environment.

    Environment variables take precedence over YAML settings.
    Variables should be prefixed with UIKIT_ (e.g., UIKIT_PORT); the mode
    also honors NODE_ENV.

    Args:
        config_path: Optional config file path (default: bundler.yaml in config dir)

    Returns:
        Validated bundler settings

    Example:
        >>> settings = load_config()
        >>> assert isinstance(settings, BundlerSettings)
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        create_default_config()

    yaml_settings = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_settings = yaml.safe_load(f) or {}
            logger.debug(f"Loaded config from {config_path}")
        except Exception as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            logger.info("Using default settings and environment variables")

    # Precedence: defaults < YAML < env vars, so drop YAML keys that env overrides
    filtered_yaml = {}
    for key, value in yaml_settings.items():
        if not any(env_key in os.environ for env_key in _env_keys(key)):
            filtered_yaml[key] = value

    settings = BundlerSettings(**filtered_yaml)

    logger.info(
        f"Bundler configuration loaded: mode={settings.mode.value}, target={settings.target}, "
        f"components={len(settings.components)}"
    )

    return settings
