"""Release library layer.

Business logic for serving cached release metadata. The releasesd daemon
is a thin HTTP transport over this package.

Public Interface:
    Modules:
    - config: Settings loading
    - storage: Config directory resolution
    - auth: GitHub credential lookup
    - sources: Remote release sources
    - cache: Cache store, refresh scheduling, version aggregation
    - errors: Exception taxonomy
"""

from .errors import AllSourcesFailed
from .errors import ReleaseCacheError
from .errors import SourceUnavailable

__all__ = [
    "AllSourcesFailed",
    "ReleaseCacheError",
    "SourceUnavailable",
]
