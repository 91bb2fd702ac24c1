"""Turn parsed documents into rule records and skill headers."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from skillpack.constants.config import DEFAULT_REQUIRED_RULE_FIELDS, DEFAULT_REQUIRED_SKILL_FIELDS
from skillpack.constants.impact import IMPACT_LEVELS
from skillpack.constants.parsing import TAG_SEPARATOR
from skillpack.exceptions import DocumentError, InvalidFieldError, MissingRequiredFieldError
from skillpack.model import ParsedDocument, RuleRecord
from skillpack.types import JsonObject, JsonValue
from skillpack.utils import normalize_impact, sanitize_skill_name, slugify

_IMPACT_DESCRIPTION_KEYS: tuple[str, ...] = ("impactDescription", "impact_description")
_RULE_KEYS: frozenset[str] = frozenset({"title", "impact", "tags", *_IMPACT_DESCRIPTION_KEYS})
_SKILL_KEYS: frozenset[str] = frozenset({"name", "description"})


@dataclass(frozen=True)
class SkillHeader:
    """Identity fields read from a ``SKILL.md`` front matter block."""

    name: str
    description: str
    metadata: JsonObject


def derive_rule_id(path: Path) -> str:
    """Derive a rule id from its file name."""
    return slugify(path.stem)


def derive_section_prefix(rule_id: str, declared_prefixes: tuple[str, ...] = ()) -> str:
    """Return the longest declared prefix matching *rule_id*, else its first dash segment."""
    matches = [prefix for prefix in declared_prefixes if rule_id == prefix or rule_id.startswith(f"{prefix}-")]
    if matches:
        return max(matches, key=len)
    return rule_id.split("-", 1)[0]


def normalize_tags(value: Any) -> tuple[str, ...]:
    """Accept a YAML list or a comma-separated string; return sorted unique tags."""
    if value is None:
        return ()
    if isinstance(value, str):
        items = value.split(TAG_SEPARATOR)
    elif isinstance(value, (list, tuple)):
        items = [str(item) for item in value if item is not None]
    else:
        items = [str(value)]
    return tuple(sorted({item.strip().lower() for item in items if item.strip()}))


def collect_rule_errors(
    parsed: ParsedDocument,
    *,
    required_fields: tuple[str, ...] = DEFAULT_REQUIRED_RULE_FIELDS,
) -> list[DocumentError]:
    """Return every front matter problem of a rule document."""
    errors: list[DocumentError] = [
        MissingRequiredFieldError(parsed.path, field)
        for field in required_fields
        if _is_blank(parsed.metadata.get(field))
    ]
    impact = parsed.metadata.get("impact")
    if not _is_blank(impact) and normalize_impact(impact) is None:
        errors.append(
            InvalidFieldError(
                parsed.path,
                f"invalid impact `{impact}`",
                field="impact",
                hint=f"expected one of: {', '.join(IMPACT_LEVELS)}",
            )
        )
    return errors


def build_rule_record(
    parsed: ParsedDocument,
    *,
    skill: str,
    path_id: str,
    declared_prefixes: tuple[str, ...] = (),
    required_fields: tuple[str, ...] = DEFAULT_REQUIRED_RULE_FIELDS,
) -> RuleRecord:
    """Build one rule record.

    Raises the first :class:`MissingRequiredFieldError` or
    :class:`InvalidFieldError` found; use :func:`collect_rule_errors` to see
    all of them.
    """
    errors = collect_rule_errors(parsed, required_fields=required_fields)
    if errors:
        raise errors[0]

    rule_id = derive_rule_id(parsed.path)
    metadata = parsed.metadata
    title = metadata.get("title")
    impact_description = next(
        (str(metadata[key]).strip() for key in _IMPACT_DESCRIPTION_KEYS if not _is_blank(metadata.get(key))),
        "",
    )
    return RuleRecord(
        id=rule_id,
        skill=skill,
        section=derive_section_prefix(rule_id, declared_prefixes),
        title=str(title).strip() if not _is_blank(title) else rule_id,
        # Missing impact only gets here when it is not a required field.
        impact=normalize_impact(metadata.get("impact")) or IMPACT_LEVELS[-1],  # type: ignore[arg-type]
        path=path_id,
        body=parsed.body,
        impact_description=impact_description,
        tags=normalize_tags(metadata.get("tags")),
        metadata=extra_rule_metadata(parsed),
        body_start_line=parsed.body_start_line,
    )


def collect_skill_errors(
    parsed: ParsedDocument,
    *,
    required_fields: tuple[str, ...] = DEFAULT_REQUIRED_SKILL_FIELDS,
) -> list[DocumentError]:
    """Return every missing required field of a ``SKILL.md`` document."""
    return [
        MissingRequiredFieldError(parsed.path, field)
        for field in required_fields
        if _is_blank(parsed.metadata.get(field))
    ]


def build_skill_header(parsed: ParsedDocument) -> SkillHeader:
    """Read name, description and extra metadata from a ``SKILL.md``.

    The name falls back to the skill folder name.
    """
    metadata = parsed.metadata
    raw_name = metadata.get("name")
    name = sanitize_skill_name(str(raw_name) if not _is_blank(raw_name) else parsed.path.parent.name)
    description = metadata.get("description")
    extra = {key: to_json_value(value) for key, value in sorted(metadata.items()) if key not in _SKILL_KEYS}
    return SkillHeader(
        name=name,
        description=" ".join(str(description).split()) if not _is_blank(description) else "",
        metadata=extra,
    )


def fallback_skill_header(skill_file: Path) -> SkillHeader:
    """Header for a ``SKILL.md`` whose front matter could not be read."""
    return SkillHeader(name=sanitize_skill_name(skill_file.parent.name), description="", metadata={})


def extra_rule_metadata(parsed: ParsedDocument) -> JsonObject:
    """Front matter keys of a rule that have no dedicated record field."""
    return {key: to_json_value(value) for key, value in sorted(parsed.metadata.items()) if key not in _RULE_KEYS}


def to_json_value(value: Any) -> JsonValue:
    """Coerce a YAML value into something ``json.dumps`` accepts deterministically."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (dt.date, dt.datetime, dt.time)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(key): to_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [to_json_value(item) for item in value]
        return sorted(items, key=str) if isinstance(value, (set, frozenset)) else items
    return str(value)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return not value
    return False
