"""General utility helpers."""

from .impact import normalize_impact
from .naming import relative_posix, sanitize_skill_name, slugify

__all__ = ["normalize_impact", "relative_posix", "sanitize_skill_name", "slugify"]
