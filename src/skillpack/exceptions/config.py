"""Configuration-related exceptions."""

from __future__ import annotations

from skillpack.exceptions.base import SkillpackError


class ConfigError(SkillpackError, ValueError):
    """Raised when compiler configuration is invalid."""
