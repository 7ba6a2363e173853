"""Response models for releasesd API."""

from datetime import datetime

from pydantic import Field

from releasesd.models.base import CamelCaseModel


class StatusResponse(CamelCaseModel):
    """Daemon status.

    Attributes:
        status: Daemon status
        version: Daemon version
        uptime_seconds: Seconds since startup
        authenticated: Whether a GitHub token was found
    """

    status: str = Field(..., description="Daemon status")
    version: str = Field(..., description="Daemon version")
    uptime_seconds: float = Field(..., description="Uptime in seconds")
    authenticated: bool = Field(..., description="Whether GitHub calls are authenticated")


class CacheStatusResponse(CamelCaseModel):
    """Current state of the release cache."""

    repository_count: int = Field(..., description="Number of configured repositories")
    cached: list[str] = Field(default_factory=list, description="Repositories with cached releases")
    failed: list[str] = Field(default_factory=list, description="Repositories whose last fetch failed")
    refreshed_at: datetime | None = Field(default=None, description="Completion time of the last refresh")
    refreshing: bool = Field(False, description="Whether a refresh cycle is in flight")
    cooldown_minutes: int = Field(..., description="Minutes between scheduled refreshes")
    scheduler_running: bool = Field(False, description="Whether scheduled refresh is active")
    next_refresh_at: datetime | None = Field(default=None, description="Next scheduled refresh")


class RefreshResponse(CamelCaseModel):
    """Result of a refresh cycle."""

    started_at: datetime = Field(..., description="Refresh start time")
    finished_at: datetime | None = Field(default=None, description="Refresh completion time")
    refreshed: list[str] = Field(default_factory=list, description="Repositories refreshed")
    failed: list[str] = Field(default_factory=list, description="Repositories that failed")
    skipped: bool = Field(False, description="True when another refresh was already running")
