"""Configuration loading for releasesd.

This module handles loading daemon configuration from YAML files
and environment variables.

Contract:
- Inputs: Config file paths, environment variables
- Outputs: ReleaseSettings objects
- Side Effects: Writes a default config file on first load
"""

import logging
import os
from pathlib import Path

import yaml

from ..storage.paths import get_config_dir
from .settings import ReleaseSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = """# releasesd daemon configuration

# Server settings
host: "127.0.0.1"
port: 3000
log_level: "info"
workers: 1

# Product versions whose repositories are pre-fetched on every refresh
min_version: 8
max_version: 12
product_prefix: "openjdk"

# Remote release source
github_owner: "AdoptOpenJDK"
# token_file: "/home/jenkins/github.auth"
# token_env_var: "GITHUB_TOKEN"

# Set to true to never run the scheduled refresh
disable_refresh: false
fetch_timeout_seconds: 30
"""


CONFIG_FILENAME = "daemon.yaml"


def load_config(config_path: Path | None = None) -> ReleaseSettings:
    """Load daemon configuration from YAML and environment.

    Writes the commented default file on first use. Environment variables
    take precedence over YAML settings; they are prefixed with RELEASESD_
    (e.g., RELEASESD_MAX_VERSION).

    Args:
        config_path: Optional config file path (default: daemon.yaml in config dir)

    Returns:
        Validated release settings
    """
    if config_path is None:
        config_path = get_config_dir() / CONFIG_FILENAME

    yaml_settings = {}
    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(DEFAULT_CONFIG, encoding="utf-8")
        logger.info(f"Wrote default config to {config_path}")
    else:
        try:
            yaml_settings = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Ignoring unreadable config {config_path}: {e}")

    # defaults < YAML < env vars: drop YAML keys that an env var overrides
    overridden = {key for key in yaml_settings if f"RELEASESD_{key.upper()}" in os.environ}
    settings = ReleaseSettings(**{k: v for k, v in yaml_settings.items() if k not in overridden})

    logger.info(
        f"Configuration loaded: versions={settings.min_version}..{settings.max_version}, "
        f"owner={settings.github_owner}, disable_refresh={settings.disable_refresh}"
    )

    return settings
