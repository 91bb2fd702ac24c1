"""Group rule records by their declared section."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from skillpack.exceptions import UnknownSectionError
from skillpack.model import RuleRecord, SectionDefinition, SectionIndex


def build_section_index(
    sections: Sequence[SectionDefinition],
    records: Iterable[RuleRecord],
) -> tuple[SectionIndex, list[UnknownSectionError]]:
    """Index *records* under *sections*, keeping declaration then insertion order.

    Records whose prefix is not declared are left out of the index and
    reported once each; nothing is raised.
    """
    declared = tuple(section.prefix for section in sections)
    grouped: dict[str, list[RuleRecord]] = {prefix: [] for prefix in declared}
    errors: list[UnknownSectionError] = []

    for record in records:
        bucket = grouped.get(record.section)
        if bucket is None:
            errors.append(UnknownSectionError(record.path, record.section, declared=declared))
            continue
        bucket.append(record)

    index = SectionIndex(
        sections=tuple(sections),
        rules_by_section={prefix: tuple(grouped[prefix]) for prefix in declared},
    )
    return index, errors
