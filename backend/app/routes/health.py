"""
MoodLog Backend — Health Check Route
======================================

What:  Liveness endpoint for container probes and load balancers.
How:   Reports configuration and uptime only. It makes no Firestore or
       Gemini call, so probes never consume provider quota.
"""

import logging
import time

from fastapi import APIRouter, Request

from app import __version__
from app.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    settings = request.app.state.settings
    return HealthResponse(
        status="healthy",
        version=__version__,
        store_backend=settings.store_backend,
        gemini_configured=bool(settings.gemini_api_key),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
