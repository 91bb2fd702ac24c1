"""Root of the Skillpack exception hierarchy."""

from __future__ import annotations


class SkillpackError(Exception):
    """Base class for all Skillpack errors."""
