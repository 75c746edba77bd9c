"""
CopyCart Backend — Health Check Route
=======================================

What:  GET /health for container and load balancer probes.
How:   Runs `SELECT 1` against the store and reports whether an inference
       credential is configured. The inference API itself is not called,
       since every call is billed and may wake a cold model.

Status levels:
    - healthy:   database reachable and credential present
    - degraded:  database reachable, no credential (AI endpoints will fail)
    - unhealthy: database unreachable
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text

from copycart import __version__
from copycart.database import engine
from copycart.schemas.product import HealthResponse
from copycart.services.marketing_service import marketing_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    db_status = "connected"
    inference_status = "configured"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    if not marketing_service.client.is_configured:
        inference_status = "not_configured"
        if overall == "healthy":
            overall = "degraded"

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        inference=inference_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
