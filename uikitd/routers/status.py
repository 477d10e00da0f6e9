"""Status router for uikitd API.

Provides health check and status information.
"""

import logging
import time
from typing import Annotated

from fastapi import APIRouter
from fastapi import Depends

from uikit_library.bundler import ComponentBundler
from uikit_library.components import ComponentRegistry

from .. import __version__
from ..dependencies import get_bundler
from ..dependencies import get_component_registry
from ..models import StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["status"])

# Track daemon start time for uptime calculation
_start_time = time.time()


@router.get("/status", response_model=StatusResponse)
async def get_status(
    bundler: Annotated[ComponentBundler, Depends(get_bundler)],
    registry: Annotated[ComponentRegistry, Depends(get_component_registry)],
) -> StatusResponse:
    """Get daemon status.

    Returns:
        Daemon status including bundler mode, active backend and cache size
    """
    bundler_status = bundler.status()

    return StatusResponse(
        status="running",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        mode=bundler_status.mode,
        backend=bundler_status.backend,
        cached_entries=bundler_status.cached_entries,
        components=len(registry.list_components()),
    )


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Simple health status
    """
    return {"status": "healthy"}
