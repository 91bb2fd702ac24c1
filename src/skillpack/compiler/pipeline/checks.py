"""Structural checks over a compiled skill set.

Every check returns a list of :class:`Violation`; the orchestrator
aggregates them so a build reports all problems at once.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from skillpack.constants.discovery import SECTIONS_FILENAME, TEMPLATE_FILENAME, UNPUBLISHED_PREFIX
from skillpack.constants.validation import ID001, ID002, PUB001, PUB002, SEC003
from skillpack.exceptions.validation import Violation
from skillpack.model import SkillDocument


def check_duplicate_rule_ids(skill: SkillDocument) -> list[Violation]:
    """Two rule files of one skill must not derive the same id."""
    paths_by_id: dict[str, list[str]] = {}
    for rule in skill.rules:
        paths_by_id.setdefault(rule.id, []).append(rule.path)

    violations: list[Violation] = []
    for rule_id, paths in sorted(paths_by_id.items()):
        if len(paths) < 2:
            continue
        ordered = sorted(paths)
        for path in ordered[1:]:
            violations.append(
                Violation(
                    code=ID001,
                    path=path,
                    field="id",
                    message=f"duplicate rule id `{rule_id}` in skill `{skill.name}`",
                    hint=f"also derived from {ordered[0]}",
                )
            )
    return violations


def check_duplicate_skill_names(skills: Iterable[SkillDocument]) -> list[Violation]:
    """Skill names must be unique within one layer."""
    paths_by_name: dict[tuple[str, str], list[str]] = {}
    for skill in skills:
        paths_by_name.setdefault((skill.layer, skill.name), []).append(skill.path)

    violations: list[Violation] = []
    for (_, name), paths in sorted(paths_by_name.items()):
        if len(paths) < 2:
            continue
        ordered = sorted(paths)
        for path in ordered[1:]:
            violations.append(
                Violation(
                    code=ID002,
                    path=path,
                    field="name",
                    message=f"duplicate skill name `{name}`",
                    hint=f"also declared by {ordered[0]}",
                )
            )
    return violations


def check_published_set(skill: SkillDocument) -> list[Violation]:
    """Templates and other underscore files must never be published as rules.

    Discovery already keeps ``_``-prefixed files out of ``skill.rules``; this
    check guards skills assembled by other callers.
    """
    violations: list[Violation] = []
    for rule in skill.rules:
        filename = rule.path.rpartition("/")[2]
        if filename.startswith(UNPUBLISHED_PREFIX) or filename in {TEMPLATE_FILENAME, SECTIONS_FILENAME}:
            violations.append(
                Violation(
                    code=PUB001,
                    path=rule.path,
                    field="",
                    message=f"`{filename}` must not be published as a rule",
                )
            )
    return violations


def check_sections_declared(skill: SkillDocument, *, has_sections_file: bool) -> list[Violation]:
    """A skill that ships rules must declare its sections."""
    if not skill.rules or has_sections_file:
        return []
    rules_dir = skill.rules[0].path.rpartition("/")[0]
    return [
        Violation(
            code=SEC003,
            path=f"{rules_dir}/{SECTIONS_FILENAME}" if rules_dir else SECTIONS_FILENAME,
            field="",
            message=f"skill `{skill.name}` has rule files but no {SECTIONS_FILENAME}",
        )
    ]


def check_orphaned_rules(orphan_ids: Sequence[str]) -> list[Violation]:
    """Rule files outside any skill directory are reported."""
    return [
        Violation(
            code=PUB002,
            path=orphan,
            field="",
            message="rule file does not belong to any skill (no sibling SKILL.md)",
        )
        for orphan in orphan_ids
    ]
