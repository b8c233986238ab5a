"""
Smart Tourism Backend — Health Check Route
============================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings MongoDB and reports the result with the service version and uptime.
Who:   Called by container health checks and uptime monitors.

Status levels:
    - healthy:   database answered the ping
    - unhealthy: database unreachable (the API cannot serve any route)
"""

import logging
import time

from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError

from smart_tourism import __version__
from smart_tourism.database import Database, get_database
from smart_tourism.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(db: Database = Depends(get_database)) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await db.ping()
    except PyMongoError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
