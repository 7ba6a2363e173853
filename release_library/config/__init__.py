"""Configuration module for release_library.

Public Interface:
    - ReleaseSettings: Settings model
    - load_config: Load configuration (writes defaults on first use)
"""

from .loader import load_config
from .settings import ReleaseSettings

__all__ = [
    "ReleaseSettings",
    "load_config",
]
