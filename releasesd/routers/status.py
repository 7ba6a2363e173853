"""Status router for releasesd API.

Provides health check and status information.
"""

import logging
import time

from fastapi import APIRouter
from fastapi import Request

from .. import __version__
from ..models import StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["status"])

# Track daemon start time for uptime calculation
_start_time = time.time()


@router.get("/status", response_model=StatusResponse)
async def get_status(request: Request) -> StatusResponse:
    """Get daemon status.

    Returns:
        Daemon status information including version, uptime and auth mode
    """
    return StatusResponse(
        status="running",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        authenticated=getattr(request.app.state, "authenticated", False),
    )


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
