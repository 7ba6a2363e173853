"""API routers for releasesd."""

from .cache import router as cache_router
from .releases import router as releases_router
from .status import router as status_router

__all__ = [
    "cache_router",
    "releases_router",
    "status_router",
]
