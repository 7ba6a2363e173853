"""Release lookup endpoints.

Serves the merged current + legacy releases for a product version.
"""

import logging
from typing import Annotated
from typing import Any

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException

from release_library.cache import ReleaseChannel
from release_library.cache import VersionAggregator
from release_library.errors import AllSourcesFailed

from ..dependencies import get_aggregator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/releases", tags=["releases"])


@router.get("/{channel}/{version}")
async def get_releases(
    channel: ReleaseChannel,
    version: str,
    aggregator: Annotated[VersionAggregator, Depends(get_aggregator)],
) -> list[dict[str, Any]]:
    """Get all releases of a version on a channel.

    Legacy-repository releases carry "oldRepo": true.
    """
    try:
        releases = await aggregator.resolve_payloads(version, channel)
    except AllSourcesFailed as exc:
        logger.error(f"{exc}: {exc.__cause__}")
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except Exception as exc:
        logger.error(f"Failed to resolve releases for {version}: {exc}")
        raise HTTPException(status_code=500, detail="Internal server error") from exc

    if not releases:
        raise HTTPException(status_code=404, detail=f"No releases found for {version} ({channel.value})")

    return releases
