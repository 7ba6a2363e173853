"""Path resolution for releasesd storage locations.

This module provides path resolution based on RELEASESD_HOME environment variable.
Cached release data never touches disk; only configuration lives here.

Contract:
- Inputs: Environment variables (RELEASESD_HOME, RELEASESD_CONFIG_DIR)
- Outputs: Resolved Path objects
- Side Effects: Creates directories if they don't exist
"""

import os
from pathlib import Path


def get_home_dir() -> Path:
    """Get RELEASESD_HOME from environment.

    Returns:
        Path to root directory (default: .releasesd)
    """
    root = os.environ.get("RELEASESD_HOME", ".releasesd")
    return Path(root).resolve()


def get_config_dir() -> Path:
    """Get configuration directory.

    Returns:
        Path to config directory ($RELEASESD_HOME/config)

    Environment Variables:
        RELEASESD_CONFIG_DIR: Override config directory location
    """
    config_dir: Path = get_home_dir() / "config"

    env_override: str | None = os.environ.get("RELEASESD_CONFIG_DIR")
    if env_override is not None:
        config_dir = Path(env_override).resolve()

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir
