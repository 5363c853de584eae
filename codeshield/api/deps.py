"""Shared FastAPI dependencies: the page session store and the caller's page."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request, Response

from codeshield.config.loader import get_settings
from codeshield.gateway.client import get_gateway
from codeshield.store.session import PageSessionStore
from codeshield.workflows.page import CodeShieldPage

_store: PageSessionStore | None = None


def _new_page() -> CodeShieldPage:
    settings = get_settings()
    return CodeShieldPage(
        get_gateway(),
        notification_limit=settings.notification_limit,
        notification_ttl_seconds=settings.notification_ttl_seconds,
    )


def get_session_store() -> PageSessionStore:
    """Get or create the process-wide page store."""
    global _store
    if _store is None:
        settings = get_settings()
        _store = PageSessionStore(
            _new_page,
            max_pages=settings.session_max_pages,
            idle_timeout=settings.session_idle_timeout,
        )
    return _store


def reset_session_store() -> None:
    """Drop every page (shutdown and tests)."""
    global _store
    _store = None


@dataclass
class PageHandle:
    token: str
    page: CodeShieldPage

    def bind(self, response: Response) -> Response:
        """Attach the session cookie.

        Sent on every response, not only on creation, so the browser's
        ``max_age`` slides along with the store's idle timer.
        """
        settings = get_settings()
        response.set_cookie(
            settings.session_cookie_name,
            self.token,
            max_age=settings.session_idle_timeout,
            httponly=True,
            samesite="lax",
            secure=settings.session_cookie_secure,
        )
        return response


async def current_page(request: Request) -> PageHandle:
    """Resolve the caller's page from the session cookie, creating one if needed."""
    settings = get_settings()
    token = request.cookies.get(settings.session_cookie_name)
    token, page, _ = get_session_store().get_or_create(token)
    return PageHandle(token=token, page=page)
