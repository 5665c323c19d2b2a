"""
Employee API — Health Check Route
==================================

What:  Health check endpoint for monitoring and container probes.
How:   Reads the injected EmployeeStore's state; performs no file I/O.
Who:   Called by Docker health checks and monitoring systems.

Status levels:
    - healthy:   the JSON file mirrors the in-memory records (HTTP 200)
    - degraded:  the last load or write failed; records live in memory only
                 (HTTP 200, flag for monitoring)
"""

import logging
import time

from fastapi import APIRouter, Depends

from employee_api import __version__
from employee_api.schemas.employee import HealthResponse
from employee_api.services.employee_store import EmployeeStore, get_employee_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Process start time for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    store: EmployeeStore = Depends(get_employee_store),
) -> HealthResponse:
    """Report whether employee storage is persisting writes."""
    if store.degraded:
        overall, storage = "degraded", "degraded"
        logger.warning("Health check: storage degraded (%s)", store.storage_path)
    else:
        overall, storage = "healthy", "persisted"

    return HealthResponse(
        status=overall,
        version=__version__,
        storage=storage,
        employee_count=store.count,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
