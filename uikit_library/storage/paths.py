"""Path resolution for uikit storage locations.

This module provides path resolution based on the UIKIT_HOME environment variable.

Contract:
- Inputs: Environment variables (UIKIT_HOME, UIKIT_CONFIG_DIR)
- Outputs: Resolved Path objects
- Side Effects: Creates directories if they don't exist
"""

import os
from pathlib import Path


def get_home_dir() -> Path:
    """Get UIKIT_HOME from environment.

    Returns:
        Path to root directory (default: .uikit)
    """
    root = os.environ.get("UIKIT_HOME", ".uikit")
    return Path(root).resolve()


def get_config_dir() -> Path:
    """Get configuration directory.

    Returns:
        Path to config directory ($UIKIT_HOME/config)

    Environment Variables:
        UIKIT_CONFIG_DIR: Override config directory location
        (falls back to $UIKIT_HOME/config if not set)

    Example:
        >>> config_dir = get_config_dir()
        >>> assert config_dir.name == "config" or "UIKIT_CONFIG_DIR" in os.environ
    """
    config_dir: Path = get_home_dir() / "config"

    env_override: str | None = os.environ.get("UIKIT_CONFIG_DIR")
    if env_override is not None:
        config_dir = Path(env_override).resolve()

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir
