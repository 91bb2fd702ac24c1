"""Config data model for Skillpack builds."""

from __future__ import annotations

from dataclasses import dataclass

from skillpack.constants.config import (
    DEFAULT_MAX_FILE_MB,
    DEFAULT_REQUIRED_RULE_FIELDS,
    DEFAULT_REQUIRED_SKILL_FIELDS,
    DEFAULT_SKILL_GLOBS,
)


@dataclass(frozen=True)
class SkillpackConfig:
    """Resolved compiler config."""

    skill_globs: tuple[str, ...] = DEFAULT_SKILL_GLOBS
    max_file_mb: int = DEFAULT_MAX_FILE_MB
    required_rule_fields: tuple[str, ...] = DEFAULT_REQUIRED_RULE_FIELDS
    required_skill_fields: tuple[str, ...] = DEFAULT_REQUIRED_SKILL_FIELDS
    strict_links: bool = False
    overlays: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()

    @property
    def max_file_bytes(self) -> int:
        return self.max_file_mb * 1024 * 1024
