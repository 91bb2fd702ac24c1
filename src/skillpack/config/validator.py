"""Config file validation for Skillpack builds."""

from __future__ import annotations

import difflib
from pathlib import Path

import yaml

from skillpack.config.loader import resolve_config_path
from skillpack.constants.validation import (
    ALLOWED_CONFIG_KEYS,
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG006,
    CFG007,
    LIST_OF_STRINGS_KEYS,
)
from skillpack.exceptions.validation import Violation


def validate_config_file(
    root: Path,
    config_path: Path | None = None,
    *,
    config_explicit: bool = False,
) -> list[Violation]:
    """Validate a skillpack.yaml file and return all violations.

    This is the collect-all entry point used by both ``skillpack validate-config``
    and the compile preflight.  It never raises; all problems are returned
    as :class:`Violation` instances.
    """
    violations: list[Violation] = []
    root = root.resolve()
    path = resolve_config_path(root, config_path)
    path_str = str(path)

    if not path.exists():
        if config_explicit:
            violations.append(
                Violation(code=CFG001, path=path_str, field="", message=f"config file not found: {path}")
            )
        return violations

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        violations.append(Violation(code=CFG002, path=path_str, field="", message=f"invalid YAML: {exc}"))
        return violations

    if raw is None:
        return violations

    if not isinstance(raw, dict):
        violations.append(
            Violation(
                code=CFG003,
                path=path_str,
                field="",
                message=f"config must be a YAML mapping, got {type(raw).__name__}",
            )
        )
        return violations

    for key in sorted(str(k) for k in raw):
        if key not in ALLOWED_CONFIG_KEYS:
            violations.append(
                Violation(
                    code=CFG004,
                    path=path_str,
                    field=key,
                    message=f"unknown key `{key}`",
                    hint=_suggest_key(key, ALLOWED_CONFIG_KEYS),
                )
            )

    if "max_file_mb" in raw:
        val = raw["max_file_mb"]
        if isinstance(val, bool) or not isinstance(val, int):
            violations.append(
                Violation(
                    code=CFG005,
                    path=path_str,
                    field="max_file_mb",
                    message="invalid type for `max_file_mb`",
                    hint="expected a positive integer",
                )
            )
        elif val <= 0:
            violations.append(
                Violation(
                    code=CFG006,
                    path=path_str,
                    field="max_file_mb",
                    message=f"`max_file_mb` must be a positive integer, got {val}",
                )
            )

    if "strict_links" in raw and not isinstance(raw["strict_links"], bool):
        violations.append(
            Violation(
                code=CFG005,
                path=path_str,
                field="strict_links",
                message="invalid type for `strict_links`",
                hint="expected true or false",
            )
        )

    for key in LIST_OF_STRINGS_KEYS:
        if key not in raw or raw[key] is None:
            continue
        val = raw[key]
        if not isinstance(val, list) or not all(isinstance(item, str) for item in val):
            violations.append(
                Violation(
                    code=CFG005,
                    path=path_str,
                    field=key,
                    message=f"invalid type for `{key}`",
                    hint="expected a list of strings",
                )
            )
            continue
        if key == "skill_globs" and not val:
            violations.append(
                Violation(code=CFG006, path=path_str, field=key, message="`skill_globs` must not be empty")
            )
        if key == "overlays":
            for item in val:
                overlay = (root / item).resolve()
                if not overlay.is_dir():
                    violations.append(
                        Violation(
                            code=CFG007,
                            path=path_str,
                            field=key,
                            message=f"overlay directory does not exist: {overlay}",
                        )
                    )

    return violations


def _suggest_key(key: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean' hint for a misspelled key."""
    matches = difflib.get_close_matches(key, sorted(allowed), n=1, cutoff=0.6)
    return f"did you mean `{matches[0]}`?" if matches else ""
