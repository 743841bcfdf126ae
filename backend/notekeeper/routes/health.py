"""
NoteKeeper Backend — Health Check Route
=========================================

What:  Health check endpoint for container probes and load balancers.
How:   Runs SELECT 1 through the shared StorageClient.

    healthy:   database reachable (HTTP 200)
    unhealthy: database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from notekeeper import __version__
from notekeeper.dependencies import get_storage
from notekeeper.schemas.note import HealthResponse
from notekeeper.storage import StorageClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(storage: StorageClient = Depends(get_storage)) -> JSONResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await storage.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    report = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(
        status_code=200 if overall == "healthy" else 503,
        content=report.model_dump(),
    )
