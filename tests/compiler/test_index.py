"""Tests for the section index."""

from __future__ import annotations

from skillpack.compiler.pipeline.index import build_section_index
from skillpack.exceptions import UnknownSectionError
from skillpack.model import RuleRecord, SectionDefinition


def _rule(rule_id: str, section: str, impact: str = "HIGH") -> RuleRecord:
    return RuleRecord(
        id=rule_id,
        skill="react",
        section=section,
        title=rule_id,
        impact=impact,  # type: ignore[arg-type]
        path=f"react/rules/{rule_id}.md",
        body="",
    )


SECTIONS = (
    SectionDefinition(prefix="async", name="Waterfalls", order=1, impact="CRITICAL"),
    SectionDefinition(prefix="bundle", name="Bundle", order=2, impact="HIGH"),
)


def test_index_preserves_section_then_insertion_order() -> None:
    records = [
        _rule("bundle-a", "bundle"),
        _rule("async-z", "async"),
        _rule("async-a", "async", impact="CRITICAL"),
    ]

    index, errors = build_section_index(SECTIONS, records)

    assert errors == []
    assert [rule.id for rule in index.rules_for("async")] == ["async-z", "async-a"]
    assert [rule.id for rule in index.ordered_rules()] == ["async-z", "async-a", "bundle-a"]
    assert index.by_impact() == {"HIGH": ("async-z", "bundle-a"), "CRITICAL": ("async-a",)}


def test_index_keeps_empty_declared_sections() -> None:
    index, errors = build_section_index(SECTIONS, [])

    assert errors == []
    assert index.rules_for("bundle") == ()
    assert list(index.rules_by_section) == ["async", "bundle"]


def test_index_reports_each_unknown_prefix_once() -> None:
    records = [_rule("async-a", "async"), _rule("server-cache", "server")]

    index, errors = build_section_index(SECTIONS, records)

    assert len(errors) == 1
    error = errors[0]
    assert isinstance(error, UnknownSectionError)
    assert error.prefix == "server"
    assert error.path == "react/rules/server-cache.md"
    assert [rule.id for rule in index.ordered_rules()] == ["async-a"]
