"""Impact levels, ordered from most to least severe."""

from __future__ import annotations

IMPACT_LEVELS: tuple[str, ...] = (
    "CRITICAL",
    "HIGH",
    "MEDIUM-HIGH",
    "MEDIUM",
    "LOW-MEDIUM",
    "LOW",
)
