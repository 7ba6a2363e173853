"""In-memory release cache.

Owns the mapping from repository key to its cached fetch result and keeps
it fresh. Readers always see one complete snapshot: a refresh builds a new
mapping and swaps it in only after every fetch has settled.

Contract:
- lookup() never raises; a failed fetch is cached as an empty entry
- refresh_all() replaces entries wholesale, failed keys fall back to absent
- Only one refresh cycle runs at a time
"""

import asyncio
import logging
from collections.abc import Iterable
from datetime import UTC
from datetime import datetime

from ..errors import SourceUnavailable
from ..sources.base import ReleaseRecord
from ..sources.base import ReleaseSource
from .models import CacheSnapshot
from .models import FetchResult
from .models import RefreshReport

logger = logging.getLogger(__name__)


class ReleaseCacheStore:
    """Caches release lists per repository and refreshes them on demand."""

    def __init__(
        self,
        source: ReleaseSource,
        repository_keys: Iterable[str],
        fetch_timeout: float | None = None,
    ) -> None:
        """Initialize the store with an empty snapshot.

        Args:
            source: Remote release source
            repository_keys: Repositories fetched by every refresh cycle
            fetch_timeout: Deadline in seconds for one repository fetch
        """
        self.source = source
        self.fetch_timeout = fetch_timeout
        self._repository_keys = tuple(dict.fromkeys(repository_keys))
        self._snapshot = CacheSnapshot()
        self._in_flight: dict[str, asyncio.Future[FetchResult]] = {}
        self._refreshing = False
        self.last_report: RefreshReport | None = None

    @property
    def repository_keys(self) -> tuple[str, ...]:
        return self._repository_keys

    @property
    def snapshot(self) -> CacheSnapshot:
        return self._snapshot

    @property
    def refreshing(self) -> bool:
        return self._refreshing

    async def lookup(self, repository_key: str) -> list[ReleaseRecord]:
        """Get cached releases for a repository, fetching once if absent.

        Failures are cached as an empty list until the next refresh.
        """
        result = await self.lookup_result(repository_key)
        # copies, so callers cannot alter the shared snapshot
        return [dict(record) for record in result.records]

    async def lookup_result(self, repository_key: str) -> FetchResult:
        """Get the cached fetch result for a repository, fetching once if absent.

        The fetch runs in its own task shared by every caller of the same key,
        so cancelling one caller does not cancel the others.
        """
        cached = self._snapshot.get(repository_key)
        if cached is not None:
            return cached

        pending = self._in_flight.get(repository_key)
        if pending is None:
            pending = asyncio.ensure_future(self._populate(repository_key))
            self._in_flight[repository_key] = pending
        return await asyncio.shield(pending)

    async def _populate(self, repository_key: str) -> FetchResult:
        try:
            result = await self._fetch(repository_key)
            if not result.succeeded:
                logger.error(f"Error getting release data from GitHub: {result.error}")
            self._snapshot = self._snapshot.with_entry(result)
            return result
        finally:
            del self._in_flight[repository_key]

    async def refresh_all(self) -> RefreshReport:
        """Refetch every tracked repository and swap in a new snapshot.

        Tracked repositories are the configured keys plus any key fetched
        on demand since. Keys whose fetch fails are left out of the new
        snapshot so the next lookup fetches them again.
        """
        report = RefreshReport(started_at=datetime.now(UTC))

        if self._refreshing:
            logger.warning("Cache refresh already in progress, skipping")
            report.skipped = True
            report.finished_at = datetime.now(UTC)
            return report

        self._refreshing = True
        try:
            keys = list(dict.fromkeys([*self._repository_keys, *self._snapshot.entries]))
            logger.info(f"Refreshing {len(keys)} repositories at {report.started_at.isoformat()}")

            results = await asyncio.gather(*(self._fetch(key) for key in keys))

            entries: dict[str, FetchResult] = {}
            for result in results:
                if result.succeeded:
                    entries[result.repository_key] = result
                    report.refreshed.append(result.repository_key)
                else:
                    logger.error(f"Error refreshing cache for {result.repository_key}: {result.error}")
                    report.failed.append(result.repository_key)

            report.finished_at = datetime.now(UTC)
            self._snapshot = CacheSnapshot(entries=entries, refreshed_at=report.finished_at)
            self.last_report = report

            logger.info(f"Cache refreshed: {len(report.refreshed)} ok, {len(report.failed)} failed")
            return report
        finally:
            self._refreshing = False

    def status(self) -> dict:
        """Summarize the current snapshot."""
        snapshot = self._snapshot
        return {
            "repository_count": len(self._repository_keys),
            "cached": sorted(key for key, result in snapshot.entries.items() if result.succeeded),
            "failed": sorted(key for key, result in snapshot.entries.items() if not result.succeeded),
            "refreshed_at": snapshot.refreshed_at,
            "refreshing": self._refreshing,
        }

    async def _fetch(self, repository_key: str) -> FetchResult:
        try:
            records = await asyncio.wait_for(self.source.fetch_all(repository_key), timeout=self.fetch_timeout)
        except SourceUnavailable as e:
            return FetchResult.failed(repository_key, e)
        except TimeoutError as e:
            error = SourceUnavailable(repository_key, f"timed out after {self.fetch_timeout}s")
            error.__cause__ = e
            return FetchResult.failed(repository_key, error)
        except Exception as e:
            logger.exception(f"Unexpected error fetching {repository_key}")
            error = SourceUnavailable(repository_key, f"{type(e).__name__}: {e}")
            error.__cause__ = e
            return FetchResult.failed(repository_key, error)
        return FetchResult.ok(repository_key, records)
