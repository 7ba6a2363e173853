"""Cache models for release records.

This module contains the data structures shared by the cache store,
the aggregator and the scheduler:
- Repository key generation
- Provenance-tagged releases
- Explicit fetch results and immutable cache snapshots
- Refresh cadence and refresh reports
"""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from datetime import UTC
from datetime import datetime
from datetime import timedelta
from enum import Enum
from types import MappingProxyType
from typing import Any

from ..errors import SourceUnavailable
from ..sources.base import ReleaseRecord

CURRENT_SUFFIX = "binaries"
LEGACY_IMPL_INFIX = "openj9"

LEGACY_MARKER_FIELD = "oldRepo"


# =============================================================================
# Repository Keys
# =============================================================================


class ReleaseChannel(str, Enum):
    """Release classification."""

    NIGHTLY = "nightly"
    RELEASES = "releases"


def build_repository_keys(min_version: int, max_version: int, prefix: str = "openjdk") -> tuple[str, ...]:
    """Enumerate the repositories refreshed on every cycle.

    Each version in [min_version, max_version] contributes the current
    binaries repository and both legacy nightly repositories.

    Example:
        >>> build_repository_keys(8, 8)
        ('openjdk8-openj9-nightly', 'openjdk8-nightly', 'openjdk8-binaries')
    """
    keys: list[str] = []
    for number in range(min_version, max_version + 1):
        version = f"{prefix}{number}"
        keys.append(f"{version}-{LEGACY_IMPL_INFIX}-{ReleaseChannel.NIGHTLY.value}")
        keys.append(f"{version}-{ReleaseChannel.NIGHTLY.value}")
        keys.append(f"{version}-{CURRENT_SUFFIX}")
    return tuple(keys)


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class TaggedRelease:
    """A fetched release plus its provenance.

    The wrapped record is shared with the cache and must not be mutated.
    """

    record: Mapping[str, Any]
    is_legacy: bool = False

    def to_payload(self) -> ReleaseRecord:
        """Return a JSON-ready copy, marking legacy releases with oldRepo."""
        payload = dict(self.record)
        if self.is_legacy:
            payload[LEGACY_MARKER_FIELD] = True
        return payload


@dataclass(frozen=True)
class FetchResult:
    """Outcome of fetching one repository: records or the failure."""

    repository_key: str
    records: tuple[ReleaseRecord, ...] = ()
    error: SourceUnavailable | None = None
    fetched_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def ok(cls, repository_key: str, records: Iterable[ReleaseRecord]) -> FetchResult:
        return cls(repository_key=repository_key, records=tuple(records))

    @classmethod
    def failed(cls, repository_key: str, error: SourceUnavailable) -> FetchResult:
        return cls(repository_key=repository_key, error=error)

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class CacheSnapshot:
    """Immutable mapping of repository key to its cached fetch result."""

    entries: Mapping[str, FetchResult] = field(default_factory=dict)
    refreshed_at: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def get(self, repository_key: str) -> FetchResult | None:
        return self.entries.get(repository_key)

    def with_entry(self, result: FetchResult) -> CacheSnapshot:
        """Copy of this snapshot with one entry set."""
        entries = dict(self.entries)
        entries[result.repository_key] = result
        return CacheSnapshot(entries=entries, refreshed_at=self.refreshed_at)

    def __contains__(self, repository_key: object) -> bool:
        return repository_key in self.entries

    def __len__(self) -> int:
        return len(self.entries)


# =============================================================================
# Scheduling
# =============================================================================


class CooldownSchedule(Enum):
    """Interval between scheduled refreshes.

    Authenticated clients get a much larger GitHub rate-limit budget,
    anonymous ones refresh less often.
    """

    AUTHENTICATED = timedelta(minutes=15)
    ANONYMOUS = timedelta(minutes=60)

    @classmethod
    def for_token(cls, token: str | None) -> CooldownSchedule:
        return cls.AUTHENTICATED if token else cls.ANONYMOUS

    @property
    def interval(self) -> timedelta:
        return self.value


@dataclass
class RefreshReport:
    """Summary of one refresh_all cycle."""

    started_at: datetime
    finished_at: datetime | None = None
    refreshed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped: bool = False
