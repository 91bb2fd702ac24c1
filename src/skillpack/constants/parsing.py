"""Constants for front matter, sections and link parsing."""

from __future__ import annotations

import re
from re import Pattern

FRONTMATTER_DELIMITER: str = "---"
# YAML allows "..." as an explicit document end marker.
FRONTMATTER_ALT_DELIMITER: str = "..."

FENCED_CODE_BLOCK_PATTERN: Pattern[str] = re.compile(r"^(`{3,}|~{3,})")
INLINE_CODE_PATTERN: Pattern[str] = re.compile(r"(`+)(?:(?!\1).)+?\1")

# [text](target "optional title"); the lookbehind skips image links.
MARKDOWN_LINK_PATTERN: Pattern[str] = re.compile(
    r"(?<!!)\[(?P<text>[^\]]*)\]\(\s*(?P<target><[^>]*>|[^)\s]+)(?:\s+(?:\"[^\"]*\"|'[^']*'))?\s*\)"
)
URL_SCHEME_PATTERN: Pattern[str] = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")

SECTION_HEADING_PATTERN: Pattern[str] = re.compile(r"^##\s+(?:(?P<number>\d+)\.\s+)?(?P<title>.+?)\s*$")
SECTION_PREFIX_PATTERN: Pattern[str] = re.compile(r"^(?P<name>.+?)\s*\((?P<prefix>[a-z0-9][a-z0-9-]*)\)$")
SECTION_IMPACT_PATTERN: Pattern[str] = re.compile(r"^\*\*Impact:?\*\*:?\s*(?P<value>.+?)\s*$", re.IGNORECASE)
SECTION_DESCRIPTION_PATTERN: Pattern[str] = re.compile(
    r"^\*\*Description:?\*\*:?\s*(?P<value>.+?)\s*$", re.IGNORECASE
)

TAG_SEPARATOR: str = ","
