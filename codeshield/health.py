"""Health and readiness endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from codeshield.api.deps import get_session_store
from codeshield.gateway.client import get_gateway

logger = structlog.get_logger()
router = APIRouter()


async def _check_gateway() -> bool:
    """Check if the AI gateway is reachable."""
    return await get_gateway().ping()


@router.get("/health")
async def health():
    """Health check: the service is up; reports gateway reachability."""
    gateway_ok = await _check_gateway()
    return {
        "status": "healthy" if gateway_ok else "degraded",
        "service": "up",
        "gateway": "up" if gateway_ok else "down",
        "pages": len(get_session_store()),
    }


@router.get("/ready")
async def ready():
    """Readiness check: 200 only when the gateway answers."""
    if await _check_gateway():
        return {"status": "ready"}
    logger.warning("readiness_gateway_down")
    return JSONResponse(status_code=503, content={"status": "not_ready", "gateway": "down"})
