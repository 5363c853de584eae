"""Security headers injection middleware."""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from codeshield.config.loader import get_settings

logger = structlog.get_logger()

_PRESETS_PATH = Path(__file__).parent.parent / "config" / "header_presets.yaml"

# Headers that should never leave the service
_STRIP_HEADERS = frozenset({
    "server",
    "x-powered-by",
})

# Cache loaded presets
_presets: dict | None = None


def _load_presets() -> dict:
    """Load header presets from YAML, caching after first load."""
    global _presets
    if _presets is not None:
        return _presets
    if not _PRESETS_PATH.exists():
        logger.error("header_presets_not_found", path=str(_PRESETS_PATH))
        _presets = {}
        return _presets
    with open(_PRESETS_PATH) as f:
        _presets = yaml.safe_load(f) or {}
    return _presets


def reset_presets_cache() -> None:
    """Reset the presets cache (for testing)."""
    global _presets
    _presets = None


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Apply the configured header preset (strict/balanced) to every response.

    The CSP forbids scripts outright, so markup that slips past the
    best-practices sanitizer still cannot execute.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        try:
            return self._apply_headers(response)
        except Exception as exc:
            logger.error("security_headers_error", error=str(exc))
            return response

    def _apply_headers(self, response: Response) -> Response:
        presets = _load_presets()
        preset = presets.get(get_settings().header_preset, presets.get("balanced", {}))

        for header in _STRIP_HEADERS:
            if header in response.headers:
                del response.headers[header]

        for header_name, header_value in preset.items():
            response.headers[header_name] = header_value
        return response
