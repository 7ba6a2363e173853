"""Release cache and aggregation engine.

This module provides:
- Repository key generation for a configured version range
- The in-memory cache store with atomic snapshot refresh
- Scheduled refresh driven by APScheduler
- Aggregation of current and legacy repositories per version

Architecture: All business logic in library, daemon provides thin HTTP wrappers.
"""

# Services
from .aggregator import VersionAggregator
from .aggregator import repository_keys_for
from .scheduler import RefreshScheduler
from .store import ReleaseCacheStore

# Models
from .models import CacheSnapshot
from .models import CooldownSchedule
from .models import FetchResult
from .models import RefreshReport
from .models import ReleaseChannel
from .models import TaggedRelease
from .models import build_repository_keys

__all__ = [
    # Services
    "ReleaseCacheStore",
    "RefreshScheduler",
    "VersionAggregator",
    # Keys
    "build_repository_keys",
    "repository_keys_for",
    # Models
    "CacheSnapshot",
    "CooldownSchedule",
    "FetchResult",
    "RefreshReport",
    "ReleaseChannel",
    "TaggedRelease",
]
