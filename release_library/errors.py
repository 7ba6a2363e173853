"""Exception taxonomy for the release cache.

SourceUnavailable is recovered inside the cache store and never reaches
callers of lookup(). AllSourcesFailed is the only failure raised out of
the aggregator.
"""


class ReleaseCacheError(Exception):
    """Base class for release cache errors."""


class SourceUnavailable(ReleaseCacheError):
    """Fetching one repository failed (network, auth, rate limit, timeout)."""

    def __init__(self, repository_key: str, reason: str, status_code: int | None = None) -> None:
        self.repository_key = repository_key
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Release source unavailable for {repository_key}: {reason}")


class AllSourcesFailed(ReleaseCacheError):
    """Every repository queried for a version/channel failed."""

    def __init__(self, version: str, channel: str, failures: list[SourceUnavailable]) -> None:
        self.version = version
        self.channel = channel
        self.failures = failures
        super().__init__(f"All release sources failed for {version} ({channel})")

