"""String normalization helpers for skill names and rule ids."""

from __future__ import annotations

from pathlib import Path

from skillpack.constants.discovery import RULE_ID_FALLBACK, SKILL_NAME_FALLBACK
from skillpack.constants.naming import COLLAPSE_DASH_PATTERN, NON_SLUG_PATTERN


def slugify(raw: str, *, fallback: str = RULE_ID_FALLBACK) -> str:
    """Lowercase and collapse non-alphanumerics to single dashes."""
    normalized = raw.strip().lower()
    normalized = NON_SLUG_PATTERN.sub("-", normalized)
    normalized = COLLAPSE_DASH_PATTERN.sub("-", normalized)
    normalized = normalized.strip("-")
    return normalized or fallback


def sanitize_skill_name(raw_name: str) -> str:
    """Normalize a skill name for stable bundle keys and overlay lookups."""
    return slugify(raw_name, fallback=SKILL_NAME_FALLBACK)


def relative_posix(path: Path, root: Path) -> str:
    """Return *path* relative to *root* as posix text, or the absolute path."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()
