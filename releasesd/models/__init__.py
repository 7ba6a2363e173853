"""API models for releasesd."""

from .responses import CacheStatusResponse
from .responses import RefreshResponse
from .responses import StatusResponse

__all__ = [
    "CacheStatusResponse",
    "RefreshResponse",
    "StatusResponse",
]
