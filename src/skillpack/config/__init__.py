"""Configuration loading, validation, and normalization for Skillpack builds.

This package facade re-exports all public names so that
``from skillpack.config import ...`` works for every caller.
"""

from __future__ import annotations

from skillpack.config.loader import load_config, resolve_config_path
from skillpack.config.model import SkillpackConfig
from skillpack.config.validator import validate_config_file

__all__ = [
    "SkillpackConfig",
    "load_config",
    "resolve_config_path",
    "validate_config_file",
]
