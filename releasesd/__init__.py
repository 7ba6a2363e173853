"""releasesd: HTTP daemon serving cached GitHub release metadata."""

__version__ = "0.1.0"
