"""FastAPI application serving the Code Shield page."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from codeshield import __version__
from codeshield.api.deps import reset_session_store
from codeshield.api.page_routes import router as page_router
from codeshield.api.state_routes import router as state_router
from codeshield.config.loader import load_settings, register_reload_handler
from codeshield.gateway.client import close_gateway, init_gateway
from codeshield.health import router as health_router
from codeshield.logging_config import setup_logging
from codeshield.middleware.security_headers import SecurityHeadersMiddleware

logger = structlog.get_logger()

_STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    settings = load_settings()
    setup_logging(log_level=settings.log_level, json_format=settings.log_json)
    register_reload_handler()

    init_gateway(settings)

    logger.info("codeshield_started", gateway=settings.gateway_url, port=settings.listen_port)

    yield

    logger.info("codeshield_shutting_down")
    await close_gateway()
    reset_session_store()
    logger.info("codeshield_stopped")


app = FastAPI(title="Code Shield", version=__version__, lifespan=lifespan)
app.add_middleware(SecurityHeadersMiddleware)
app.mount("/static", StaticFiles(directory=str(_STATIC_DIR)), name="static")

app.include_router(health_router)
app.include_router(state_router)
app.include_router(page_router)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    error_id = uuid4().hex[:8]
    # No traceback: frames may hold submitted code
    logger.error("unhandled_error", error_id=error_id, path=request.url.path, error=type(exc).__name__)
    return JSONResponse(
        status_code=500,
        content={"error": True, "message": "Internal error", "error_id": error_id},
    )
