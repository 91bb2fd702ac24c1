"""Stable violation codes and allowed-key sets for config and bundle validation."""

from __future__ import annotations

CFG001: str = "CFG001"  # config file not found (explicit --config)
CFG002: str = "CFG002"  # invalid YAML parse
CFG003: str = "CFG003"  # top-level value is not a mapping
CFG004: str = "CFG004"  # unknown top-level key
CFG005: str = "CFG005"  # invalid value type
CFG006: str = "CFG006"  # value out of range
CFG007: str = "CFG007"  # source or overlay directory not found

DOC001: str = "DOC001"  # file unreadable
DOC002: str = "DOC002"  # malformed front matter
FLD001: str = "FLD001"  # missing required field
FLD002: str = "FLD002"  # invalid field value
SEC001: str = "SEC001"  # unknown section prefix
SEC002: str = "SEC002"  # duplicate section prefix
SEC003: str = "SEC003"  # rules directory without _sections.md
SEC004: str = "SEC004"  # malformed section heading
ID001: str = "ID001"  # duplicate rule id
ID002: str = "ID002"  # duplicate skill name
PUB001: str = "PUB001"  # unpublished file in the published set
PUB002: str = "PUB002"  # orphaned rule file
LNK001: str = "LNK001"  # dangling link

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {
        "skill_globs",
        "max_file_mb",
        "required_rule_fields",
        "required_skill_fields",
        "strict_links",
        "overlays",
        "exclude",
    }
)

LIST_OF_STRINGS_KEYS: tuple[str, ...] = (
    "skill_globs",
    "required_rule_fields",
    "required_skill_fields",
    "overlays",
    "exclude",
)
