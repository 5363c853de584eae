"""In-memory store of page sessions, keyed by an opaque cookie token."""

from __future__ import annotations

import re
import secrets
import time
from collections import OrderedDict
from collections.abc import Callable

import structlog

from codeshield.workflows.page import CodeShieldPage

logger = structlog.get_logger()

# Token length in bytes (32 bytes = 64 hex chars)
_TOKEN_BYTES = 32

# Valid token format: exactly 64 lowercase hex characters
_TOKEN_PATTERN = re.compile(r"^[0-9a-f]{64}$")


def generate_token() -> str:
    """Generate a cryptographically secure session token."""
    return secrets.token_hex(_TOKEN_BYTES)


def is_valid_token(token: str | None) -> bool:
    return bool(token) and _TOKEN_PATTERN.match(token) is not None


class PageSessionStore:
    """LRU-bounded, idle-expiring map of token -> CodeShieldPage.

    Nothing is persisted: a process restart or an expired token starts a
    fresh, empty page.
    """

    def __init__(
        self,
        page_factory: Callable[[], CodeShieldPage],
        *,
        max_pages: int = 1000,
        idle_timeout: int = 1800,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._factory = page_factory
        self._max_pages = max_pages
        self._idle_timeout = idle_timeout
        self._clock = clock
        self._pages: OrderedDict[str, tuple[CodeShieldPage, float]] = OrderedDict()

    def get(self, token: str | None) -> CodeShieldPage | None:
        """Return the live page for ``token`` and refresh its idle timer."""
        if not is_valid_token(token):
            return None
        entry = self._pages.get(token)
        if entry is None:
            return None
        page, last_seen = entry
        now = self._clock()
        if now - last_seen > self._idle_timeout:
            del self._pages[token]
            logger.info("page_session_expired", idle_seconds=int(now - last_seen))
            return None
        self._pages[token] = (page, now)
        self._pages.move_to_end(token)
        return page

    def get_or_create(self, token: str | None) -> tuple[str, CodeShieldPage, bool]:
        """Return (token, page, created)."""
        page = self.get(token)
        if page is not None:
            return token, page, False
        token = generate_token()
        page = self._factory()
        self._pages[token] = (page, self._clock())
        self._evict()
        logger.debug("page_session_created", live_pages=len(self._pages))
        return token, page, True

    def _evict(self) -> None:
        while len(self._pages) > self._max_pages:
            self._pages.popitem(last=False)
            logger.info("page_session_evicted", max_pages=self._max_pages)

    def __len__(self) -> int:
        return len(self._pages)
