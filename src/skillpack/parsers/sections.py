"""Parser for ``rules/_sections.md`` section declarations.

Each section is a level-2 heading followed by optional bold fields::

    ## 1. Eliminating Waterfalls (async)

    **Impact:** CRITICAL
    **Description:** Waterfalls are the top performance killer.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from skillpack.constants.parsing import (
    SECTION_DESCRIPTION_PATTERN,
    SECTION_HEADING_PATTERN,
    SECTION_IMPACT_PATTERN,
    SECTION_PREFIX_PATTERN,
)
from skillpack.constants.validation import FLD002, SEC002, SEC004
from skillpack.model import SectionDefinition
from skillpack.parsers.frontmatter import parse_markdown_text
from skillpack.parsers.markdown import iter_prose_lines
from skillpack.utils import normalize_impact


@dataclass(frozen=True)
class SectionProblem:
    """A problem found in a sections file, located by line."""

    code: str
    line: int
    message: str


@dataclass
class _PendingSection:
    prefix: str
    name: str
    line: int
    impact: str | None = None
    description: str = ""


def parse_sections_file(path: Path) -> tuple[tuple[SectionDefinition, ...], tuple[SectionProblem, ...]]:
    """Parse a sections file into ordered definitions plus any problems found."""
    return parse_sections_text(path.read_text(encoding="utf-8"), path)


def parse_sections_text(
    text: str,
    path: Path,
) -> tuple[tuple[SectionDefinition, ...], tuple[SectionProblem, ...]]:
    """Parse sections text; never raises for content problems."""
    parsed = parse_markdown_text(text, path)
    pending: list[_PendingSection] = []
    problems: list[SectionProblem] = []
    current: _PendingSection | None = None

    for line_number, line in iter_prose_lines(parsed.body, start_line=parsed.body_start_line):
        stripped = line.strip()
        heading = SECTION_HEADING_PATTERN.match(stripped)
        if heading:
            prefixed = SECTION_PREFIX_PATTERN.match(heading.group("title"))
            if not prefixed:
                current = None
                problems.append(
                    SectionProblem(
                        code=SEC004,
                        line=line_number,
                        message=f"section heading `{stripped}` does not declare a `(prefix)`",
                    )
                )
                continue
            current = _PendingSection(
                prefix=prefixed.group("prefix"),
                name=prefixed.group("name").strip(),
                line=line_number,
            )
            pending.append(current)
            continue

        if current is None:
            continue
        impact = SECTION_IMPACT_PATTERN.match(stripped)
        if impact:
            value = normalize_impact(impact.group("value"))
            if value is not None:
                current.impact = value
            else:
                problems.append(
                    SectionProblem(
                        code=FLD002,
                        line=line_number,
                        message=f"section `{current.prefix}` has unknown impact `{impact.group('value')}`",
                    )
                )
            continue
        description = SECTION_DESCRIPTION_PATTERN.match(stripped)
        if description:
            current.description = description.group("value")

    definitions: list[SectionDefinition] = []
    seen: set[str] = set()
    for section in pending:
        if section.prefix in seen:
            problems.append(
                SectionProblem(
                    code=SEC002,
                    line=section.line,
                    message=f"section prefix `{section.prefix}` is declared more than once",
                )
            )
            continue
        seen.add(section.prefix)
        definitions.append(
            SectionDefinition(
                prefix=section.prefix,
                name=section.name,
                order=len(definitions) + 1,
                impact=section.impact,  # type: ignore[arg-type]
                description=section.description,
            )
        )

    return tuple(definitions), tuple(problems)
