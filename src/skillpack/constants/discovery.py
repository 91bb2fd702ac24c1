"""Constants for filesystem discovery and the skill directory layout."""

from __future__ import annotations

SKILL_MARKDOWN_FILENAME: str = "SKILL.md"
README_FILENAME: str = "README.md"
RULES_DIRNAME: str = "rules"
SECTIONS_FILENAME: str = "_sections.md"
TEMPLATE_FILENAME: str = "_template.md"
# Files under rules/ starting with this prefix are never published as rules.
UNPUBLISHED_PREFIX: str = "_"
MARKDOWN_SUFFIX: str = ".md"
SKILL_NAME_FALLBACK: str = "unnamed-skill"
RULE_ID_FALLBACK: str = "unnamed-rule"
