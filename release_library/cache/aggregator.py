"""Version aggregation across current and legacy repositories.

Releases for one product version live in up to three repositories:
- "{version}-binaries" (current naming scheme)
- "{version}-{channel}" (legacy scheme)
- "{version}-openj9-{channel}" (legacy scheme, secondary implementation)

The aggregator looks all three up concurrently through the cache store,
tags legacy releases, and merges them in that order without duplicates.
"""

import asyncio
import json
import logging
from dataclasses import dataclass

from ..errors import AllSourcesFailed
from ..errors import SourceUnavailable
from ..sources.base import ReleaseRecord
from .models import CURRENT_SUFFIX
from .models import LEGACY_IMPL_INFIX
from .models import FetchResult
from .models import ReleaseChannel
from .models import TaggedRelease
from .store import ReleaseCacheStore

logger = logging.getLogger(__name__)

# Version variants that never had a secondary-implementation legacy stream
NO_SECONDARY_STREAM_MARKERS = ("amber",)


@dataclass(frozen=True)
class VersionKeys:
    """Repository keys queried for a version/channel pair."""

    current: str
    legacy_primary: str
    legacy_secondary: str | None


def repository_keys_for(version: str, channel: ReleaseChannel | str) -> VersionKeys:
    """Derive the repository keys for a version and channel.

    Example:
        >>> repository_keys_for("openjdk8", "nightly").legacy_secondary
        'openjdk8-openj9-nightly'
    """
    channel = ReleaseChannel(channel)
    secondary: str | None = f"{version}-{LEGACY_IMPL_INFIX}-{channel.value}"
    if any(marker in version for marker in NO_SECONDARY_STREAM_MARKERS):
        secondary = None
    return VersionKeys(
        current=f"{version}-{CURRENT_SUFFIX}",
        legacy_primary=f"{version}-{channel.value}",
        legacy_secondary=secondary,
    )


class VersionAggregator:
    """Resolves the merged release list for a version and channel."""

    def __init__(self, store: ReleaseCacheStore) -> None:
        self.store = store

    async def resolve(self, version: str, channel: ReleaseChannel | str) -> list[TaggedRelease]:
        """Merge current and legacy releases for a version.

        Args:
            version: Product version, e.g. "openjdk11"
            channel: "nightly" or "releases"

        Returns:
            Current releases, then legacy-primary, then legacy-secondary,
            with duplicates removed

        Raises:
            ValueError: If channel is not a known release channel
            AllSourcesFailed: If every repository looked up failed
        """
        keys = repository_keys_for(version, channel)
        lookups = [keys.current, keys.legacy_primary]
        if keys.legacy_secondary is not None:
            lookups.append(keys.legacy_secondary)

        settled = await asyncio.gather(
            *(self.store.lookup_result(key) for key in lookups),
            return_exceptions=True,
        )

        failures: list[SourceUnavailable] = []
        records: dict[str, tuple[ReleaseRecord, ...]] = {}
        for key, outcome in zip(lookups, settled, strict=True):
            if isinstance(outcome, FetchResult) and outcome.succeeded:
                records[key] = outcome.records
            elif isinstance(outcome, FetchResult):
                failures.append(outcome.error)
            elif isinstance(outcome, Exception):
                failures.append(SourceUnavailable(key, f"{type(outcome).__name__}: {outcome}"))
            else:
                raise outcome

        if len(failures) == len(lookups):
            logger.error(f"Failed to get releases for {version} ({ReleaseChannel(channel).value})")
            raise AllSourcesFailed(version, ReleaseChannel(channel).value, failures) from failures[0]

        groups = [
            (keys.current, False),
            (keys.legacy_primary, True),
            (keys.legacy_secondary, True),
        ]
        merged: list[TaggedRelease] = []
        seen: set[str] = set()
        for key, is_legacy in groups:
            for record in records.get(key, ()):
                tagged = TaggedRelease(record=record, is_legacy=is_legacy)
                fingerprint = _fingerprint(tagged)
                if fingerprint in seen:
                    continue
                seen.add(fingerprint)
                merged.append(tagged)

        return merged

    async def resolve_payloads(self, version: str, channel: ReleaseChannel | str) -> list[ReleaseRecord]:
        """Like resolve(), returning JSON-ready dicts with oldRepo marks."""
        return [release.to_payload() for release in await self.resolve(version, channel)]


def _fingerprint(release: TaggedRelease) -> str:
    return json.dumps([release.is_legacy, release.record], sort_keys=True, default=str)
