"""Tests for structural bundle checks."""

from __future__ import annotations

from skillpack.compiler.pipeline.checks import (
    check_duplicate_rule_ids,
    check_duplicate_skill_names,
    check_orphaned_rules,
    check_published_set,
    check_sections_declared,
)
from skillpack.model import RuleRecord, SkillDocument


def _rule(rule_id: str, filename: str) -> RuleRecord:
    return RuleRecord(
        id=rule_id,
        skill="react",
        section=rule_id.split("-", 1)[0],
        title=rule_id,
        impact="HIGH",
        path=f"react/rules/{filename}",
        body="",
    )


def _skill(*rules: RuleRecord, name: str = "react", layer: str = "base") -> SkillDocument:
    return SkillDocument(
        name=name,
        description="d",
        category="",
        path=f"{name}/SKILL.md",
        layer=layer,
        rules=rules,
    )


def test_duplicate_rule_ids_are_reported_once_per_extra_file() -> None:
    skill = _skill(_rule("async-defer", "async-defer.md"), _rule("async-defer", "async_defer.md"))

    violations = check_duplicate_rule_ids(skill)

    assert len(violations) == 1
    assert violations[0].code == "ID001"
    assert violations[0].path == "react/rules/async_defer.md"
    assert "react/rules/async-defer.md" in violations[0].hint


def test_unique_rule_ids_pass() -> None:
    assert check_duplicate_rule_ids(_skill(_rule("async-a", "async-a.md"), _rule("async-b", "async-b.md"))) == []


def test_duplicate_skill_names_only_within_a_layer() -> None:
    skills = [
        _skill(name="react", layer="base"),
        SkillDocument(name="react", description="d", category="x", path="x/react/SKILL.md", layer="base"),
        _skill(name="react", layer="local"),
    ]

    violations = check_duplicate_skill_names(skills)

    assert [violation.code for violation in violations] == ["ID002"]
    assert violations[0].path == "x/react/SKILL.md"


def test_published_set_rejects_template_files() -> None:
    skill = _skill(_rule("template", "_template.md"), _rule("async-a", "async-a.md"))

    violations = check_published_set(skill)

    assert [(violation.code, violation.path) for violation in violations] == [("PUB001", "react/rules/_template.md")]


def test_sections_must_be_declared_when_rules_exist() -> None:
    skill = _skill(_rule("async-a", "async-a.md"))

    violations = check_sections_declared(skill, has_sections_file=False)

    assert [violation.path for violation in violations] == ["react/rules/_sections.md"]
    assert check_sections_declared(skill, has_sections_file=True) == []
    assert check_sections_declared(_skill(), has_sections_file=False) == []


def test_orphaned_rules() -> None:
    violations = check_orphaned_rules(["loose/rules/async-a.md"])

    assert [(violation.code, violation.path) for violation in violations] == [("PUB002", "loose/rules/async-a.md")]
