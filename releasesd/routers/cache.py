"""Thin HTTP wrapper around the release cache store.

Architecture: This router contains ONLY HTTP handling.
All business logic is in release_library.cache.
"""

import logging
from typing import Annotated

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException

from release_library.cache import RefreshScheduler
from release_library.cache import ReleaseCacheStore

from ..dependencies import get_cache_store
from ..dependencies import get_refresh_scheduler
from ..models import CacheStatusResponse
from ..models import RefreshResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/cache", tags=["cache"])


@router.get("/status", response_model=CacheStatusResponse)
async def get_cache_status(
    store: Annotated[ReleaseCacheStore, Depends(get_cache_store)],
    scheduler: Annotated[RefreshScheduler, Depends(get_refresh_scheduler)],
) -> CacheStatusResponse:
    """Get cached and failed repositories and refresh timing."""
    try:
        return CacheStatusResponse(
            **store.status(),
            cooldown_minutes=int(scheduler.cooldown.interval.total_seconds() // 60),
            scheduler_running=scheduler.running,
            next_refresh_at=scheduler.next_run_time() if scheduler.running else None,
        )
    except Exception as exc:
        logger.error(f"Failed to get cache status: {exc}")
        raise HTTPException(status_code=500, detail="Internal server error") from exc


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_cache(
    scheduler: Annotated[RefreshScheduler, Depends(get_refresh_scheduler)],
) -> RefreshResponse:
    """Refresh every tracked repository now."""
    try:
        report = await scheduler.trigger()
    except Exception as exc:
        logger.error(f"Failed to refresh cache: {exc}")
        raise HTTPException(status_code=500, detail="Internal server error") from exc

    return RefreshResponse(
        started_at=report.started_at,
        finished_at=report.finished_at,
        refreshed=report.refreshed,
        failed=report.failed,
        skipped=report.skipped,
    )
