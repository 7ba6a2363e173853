"""Scheduled cache refresh.

Runs ReleaseCacheStore.refresh_all() on an APScheduler interval trigger.

Architecture:
- Uses APScheduler AsyncIOScheduler on the daemon's event loop
- Interval comes from the CooldownSchedule picked at startup
- First refresh runs immediately, unless start(run_immediately=False)
- max_instances=1: a cycle that overruns the interval is not doubled up
- trigger() runs one refresh directly so tests need no wall-clock delay
"""

import logging
from datetime import UTC
from datetime import datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .models import CooldownSchedule
from .models import RefreshReport
from .store import ReleaseCacheStore

logger = logging.getLogger(__name__)

REFRESH_JOB_ID = "release-cache-refresh"


class RefreshScheduler:
    """Drives periodic refreshes of a release cache store."""

    def __init__(
        self,
        store: ReleaseCacheStore,
        cooldown: CooldownSchedule,
        scheduler: AsyncIOScheduler | None = None,
    ) -> None:
        """Initialize refresh scheduler.

        Args:
            store: Cache store to refresh
            cooldown: Interval between refreshes
            scheduler: Optional APScheduler instance (default: new UTC AsyncIOScheduler)
        """
        self.store = store
        self.cooldown = cooldown
        self.scheduler = scheduler or AsyncIOScheduler(timezone="UTC")
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def start(self, run_immediately: bool = True) -> None:
        """Start the scheduler and register the refresh job.

        Idempotent - safe to call multiple times.
        """
        if self._running:
            logger.warning("Refresh scheduler already running")
            return

        job_options = {}
        if run_immediately:
            job_options["next_run_time"] = datetime.now(UTC)

        trigger = IntervalTrigger(seconds=int(self.cooldown.interval.total_seconds()), timezone="UTC")
        self.scheduler.add_job(
            func=self.trigger,
            trigger=trigger,
            id=REFRESH_JOB_ID,
            name="Release cache refresh",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            **job_options,
        )

        self.scheduler.start()
        self._running = True
        logger.info(f"Refresh scheduler started ({self.cooldown.name.lower()}, every {self.cooldown.interval})")

    async def stop(self) -> None:
        """Cancel the refresh schedule."""
        if not self._running:
            logger.warning("Refresh scheduler not running")
            return

        logger.info("Stopping refresh scheduler")
        self.scheduler.shutdown(wait=False)
        self._running = False

    def next_run_time(self) -> datetime | None:
        job = self.scheduler.get_job(REFRESH_JOB_ID)
        return job.next_run_time if job else None

    async def trigger(self) -> RefreshReport:
        """Run one refresh cycle now."""
        logger.info(f"Refresh at: {datetime.now(UTC).isoformat()}")
        return await self.store.refresh_all()
