"""Shared exception hierarchy for Skillpack."""

from __future__ import annotations

from .base import SkillpackError
from .config import ConfigError
from .parsing import (
    DocumentError,
    InvalidFieldError,
    MalformedFrontMatterError,
    MissingRequiredFieldError,
    UnknownSectionError,
)
from .validation import ValidationError, Violation

__all__ = [
    "ConfigError",
    "DocumentError",
    "InvalidFieldError",
    "MalformedFrontMatterError",
    "MissingRequiredFieldError",
    "SkillpackError",
    "UnknownSectionError",
    "ValidationError",
    "Violation",
]
