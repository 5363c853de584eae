"""Trust boundary for gateway-supplied markup and links."""

from __future__ import annotations

from urllib.parse import urlparse

import bleach
from markupsafe import Markup, escape

# Formatting a best-practices answer may use. Everything else is stripped.
ALLOWED_TAGS = frozenset({
    "a", "b", "blockquote", "br", "code", "em", "h1", "h2", "h3", "h4",
    "h5", "h6", "hr", "i", "li", "ol", "p", "pre", "strong", "ul",
})
ALLOWED_ATTRIBUTES = {"a": ["href", "title"]}
ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto"})

_LINK_SCHEMES = frozenset({"http", "https"})


def sanitize_markup(html: str) -> Markup:
    """Clean gateway HTML down to the formatting allowlist."""
    cleaned = bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )
    return Markup(cleaned)


def render_best_practices(html: str, mode: str = "sanitize") -> Markup:
    """Best-practices answer ready for the template.

    ``plain`` escapes every tag; ``sanitize`` keeps allowlisted formatting.
    """
    if mode == "plain":
        return escape(html)
    return sanitize_markup(html)


def safe_reference_url(url: str) -> str | None:
    """Return ``url`` if it may be rendered as a link, else None."""
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return None
    if parsed.scheme.lower() in _LINK_SCHEMES and parsed.netloc:
        return url.strip()
    return None
