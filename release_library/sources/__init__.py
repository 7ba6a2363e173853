"""Remote release sources.

Public Interface:
    - ReleaseSource: Protocol implemented by every source
    - ReleaseRecord: Opaque release payload type
    - GitHubReleaseSource: GitHub REST API implementation
"""

from .base import ReleaseRecord
from .base import ReleaseSource
from .github import GitHubReleaseSource

__all__ = [
    "ReleaseRecord",
    "ReleaseSource",
    "GitHubReleaseSource",
]
