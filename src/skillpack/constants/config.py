"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "skillpack.yaml"
DEFAULT_MAX_FILE_MB: int = 2
DEFAULT_SKILL_GLOBS: tuple[str, ...] = ("**/SKILL.md",)
DEFAULT_REQUIRED_RULE_FIELDS: tuple[str, ...] = ("title", "impact")
DEFAULT_REQUIRED_SKILL_FIELDS: tuple[str, ...] = ("name", "description")
