"""Severity text to badge style."""

from __future__ import annotations

# First match wins, checked in this order
_BADGE_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("high", "critical"), "destructive"),
    (("medium",), "secondary"),
    (("low",), "outline"),
)


def badge_variant(severity: str) -> str:
    """Map free-text severity to a badge variant by case-insensitive substring.

    >>> badge_variant("Critical")
    'destructive'
    >>> badge_variant("Medium-Low")
    'secondary'
    """
    lowered = severity.lower()
    for needles, variant in _BADGE_RULES:
        if any(needle in lowered for needle in needles):
            return variant
    return "default"


def findings_summary(count: int) -> str:
    noun = "vulnerabilities" if count > 1 else "vulnerability"
    return f"Found {count} potential {noun}."
