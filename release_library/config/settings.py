"""Settings models for the releasesd daemon.

Contract:
- Inputs: Environment variables, YAML files
- Outputs: Validated settings objects
- Side Effects: None (read-only)
"""

from pathlib import Path

from pydantic import field_validator
from pydantic import model_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class ReleaseSettings(BaseSettings):
    """Configuration for releasesd.

    Attributes:
        host: Listen address (default: 127.0.0.1)
        port: Listen port (default: 3000)
        log_level: Logging level (default: info)
        workers: Number of workers (default: 1)
        min_version: Lowest product version number to pre-fetch
        max_version: Highest product version number to pre-fetch
        product_prefix: Prefix of every repository name (e.g. "openjdk")
        github_owner: Organization owning the release repositories
        github_api_url: Base URL of the GitHub REST API
        token_file: Local file holding a GitHub token
        token_env_var: Environment variable holding a GitHub token
        disable_refresh: Skip the scheduled cache refresh (tests)
        fetch_timeout_seconds: Deadline for fetching one repository

    Example:
        >>> settings = ReleaseSettings()
        >>> assert settings.min_version <= settings.max_version
    """

    model_config = SettingsConfigDict(
        env_prefix="RELEASESD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "info"
    workers: int = 1

    min_version: int = 8
    max_version: int = 12
    product_prefix: str = "openjdk"

    github_owner: str = "AdoptOpenJDK"
    github_api_url: str = "https://api.github.com"
    token_file: str = "/home/jenkins/github.auth"
    token_env_var: str = "GITHUB_TOKEN"

    disable_refresh: bool = False
    fetch_timeout_seconds: float = 30.0

    @field_validator("token_file")
    @classmethod
    def expand_token_path(cls, v: str) -> str:
        """Expand ~ in the token file location."""
        return str(Path(v).expanduser())

    @model_validator(mode="after")
    def check_version_range(self) -> "ReleaseSettings":
        if self.max_version < self.min_version:
            raise ValueError(
                f"max_version ({self.max_version}) must not be lower than min_version ({self.min_version})"
            )
        return self
