"""Impact level normalization shared by rule and section parsing."""

from __future__ import annotations

from typing import Any

from skillpack.constants.impact import IMPACT_LEVELS


def normalize_impact(value: Any) -> str | None:
    """Normalize an impact value to its canonical spelling, or None if unknown."""
    if not isinstance(value, str):
        return None
    candidate = "-".join(value.strip().upper().replace("_", " ").replace("-", " ").split())
    return candidate if candidate in IMPACT_LEVELS else None
