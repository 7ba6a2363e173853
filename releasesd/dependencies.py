"""Shared dependency factories for FastAPI endpoints.

Services are built once in the application lifespan and kept on
app.state; these factories hand them to the routers.
"""

from fastapi import Request

from release_library.cache import RefreshScheduler
from release_library.cache import ReleaseCacheStore
from release_library.cache import VersionAggregator


def get_cache_store(request: Request) -> ReleaseCacheStore:
    """Get the release cache store."""
    return request.app.state.cache_store


def get_aggregator(request: Request) -> VersionAggregator:
    """Get the version aggregator."""
    return request.app.state.aggregator


def get_refresh_scheduler(request: Request) -> RefreshScheduler:
    """Get the refresh scheduler."""
    return request.app.state.refresh_scheduler
