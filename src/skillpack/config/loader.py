"""Config loading and normalization for Skillpack builds."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from skillpack.config.model import SkillpackConfig
from skillpack.constants.config import (
    CONFIG_FILENAME,
    DEFAULT_MAX_FILE_MB,
    DEFAULT_REQUIRED_RULE_FIELDS,
    DEFAULT_REQUIRED_SKILL_FIELDS,
    DEFAULT_SKILL_GLOBS,
)
from skillpack.exceptions import ConfigError


def resolve_config_path(root: Path, config_path: Path | None = None) -> Path:
    """Return the explicit config path or ``skillpack.yaml`` under *root*."""
    return config_path.resolve() if config_path else (root.resolve() / CONFIG_FILENAME)


def load_config(root: Path, config_path: Path | None = None) -> SkillpackConfig:
    """Load and validate compiler config from ``skillpack.yaml`` or an explicit path."""
    path = resolve_config_path(root, config_path)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return SkillpackConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    max_file_mb = raw.get("max_file_mb", DEFAULT_MAX_FILE_MB)
    if isinstance(max_file_mb, bool) or not isinstance(max_file_mb, int) or max_file_mb <= 0:
        raise ConfigError("max_file_mb must be a positive integer")

    strict_links = raw.get("strict_links", False)
    if not isinstance(strict_links, bool):
        raise ConfigError("strict_links must be a boolean")

    skill_globs = tuple(_ensure_string_list(raw.get("skill_globs", list(DEFAULT_SKILL_GLOBS)), "skill_globs"))
    if not skill_globs:
        raise ConfigError("skill_globs must not be empty")

    return SkillpackConfig(
        skill_globs=skill_globs,
        max_file_mb=max_file_mb,
        required_rule_fields=_normalize_fields(
            _ensure_string_list(raw.get("required_rule_fields", list(DEFAULT_REQUIRED_RULE_FIELDS)), "required_rule_fields")
        ),
        required_skill_fields=_normalize_fields(
            _ensure_string_list(
                raw.get("required_skill_fields", list(DEFAULT_REQUIRED_SKILL_FIELDS)),
                "required_skill_fields",
            )
        ),
        strict_links=strict_links,
        overlays=tuple(item.strip() for item in _ensure_string_list(raw.get("overlays", []), "overlays") if item.strip()),
        exclude=tuple(item.strip() for item in _ensure_string_list(raw.get("exclude", []), "exclude") if item.strip()),
    )


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)


def _normalize_fields(fields: list[str]) -> tuple[str, ...]:
    """Strip and deduplicate field names, keeping first-seen order."""
    seen: dict[str, None] = {}
    for item in fields:
        stripped = item.strip()
        if stripped:
            seen.setdefault(stripped, None)
    return tuple(seen)
