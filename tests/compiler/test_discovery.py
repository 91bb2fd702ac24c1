"""Tests for skill discovery."""

from __future__ import annotations

from pathlib import Path

from skillpack.compiler.discovery import (
    collect_skill_source,
    discover_markdown_documents,
    discover_skill_files,
    find_orphaned_rule_files,
)
from tests._fixtures.skill_tree import VALID_SKILL, TreeWriter, rule_text


def test_discovers_fixture_skills_in_stable_order(basic_repo_root: Path) -> None:
    files, warnings = discover_skill_files(basic_repo_root, ("**/SKILL.md",), 1024 * 1024)

    root = basic_repo_root.resolve()
    assert [path.relative_to(root).as_posix() for path in files] == [
        "conventions/naming/SKILL.md",
        "frontend/react-best-practices/SKILL.md",
        "tooling/commit-messages/SKILL.md",
    ]
    assert warnings == []


def test_discovery_skips_hidden_excluded_and_oversized(write_tree: TreeWriter) -> None:
    root = write_tree(
        {
            "a/SKILL.md": VALID_SKILL.format(name="a"),
            ".agents/local/b/SKILL.md": VALID_SKILL.format(name="b"),
            "drafts/c/SKILL.md": VALID_SKILL.format(name="c"),
            "big/SKILL.md": "x" * 200,
        }
    )

    files, warnings = discover_skill_files(root, ("**/SKILL.md",), 100, exclude=("drafts/*",))

    assert [path.parent.name for path in files] == ["a"]
    assert len(warnings) == 1
    assert "big/SKILL.md" in warnings[0]


def test_collect_skill_source_separates_unpublished_files(basic_repo_root: Path) -> None:
    source = collect_skill_source(basic_repo_root / "frontend" / "react-best-practices" / "SKILL.md")

    assert source.readme is not None
    assert source.sections_file is not None and source.sections_file.name == "_sections.md"
    assert [path.name for path in source.rule_files] == [
        "async-defer-await.md",
        "async-parallel.md",
        "bundle-barrel-imports.md",
        "rerender-memo.md",
    ]
    assert [path.name for path in source.unpublished_files] == ["_template.md"]


def test_skill_without_rules_directory(basic_repo_root: Path) -> None:
    source = collect_skill_source(basic_repo_root / "conventions" / "naming" / "SKILL.md")

    assert source.readme is None
    assert source.sections_file is None
    assert source.rule_files == ()


def test_find_orphaned_rule_files(write_tree: TreeWriter) -> None:
    root = write_tree(
        {
            "skill/SKILL.md": VALID_SKILL.format(name="skill"),
            "skill/rules/async-a.md": rule_text(),
            "loose/rules/async-b.md": rule_text(),
            "loose/rules/_template.md": rule_text(),
        }
    )

    orphans = find_orphaned_rule_files(root)

    assert [path.relative_to(root.resolve()).as_posix() for path in orphans] == ["loose/rules/async-b.md"]


def test_discover_markdown_documents_includes_underscore_files(write_tree: TreeWriter) -> None:
    root = write_tree(
        {
            "react/SKILL.md": VALID_SKILL.format(name="react"),
            "react/rules/_template.md": rule_text(),
            "docs/guide.md": "# Guide\n",
            "docs/notes.txt": "not markdown",
            ".cache/stale.md": "# Stale\n",
            "drafts/wip.md": "# WIP\n",
        }
    )

    documents = discover_markdown_documents(root, exclude=("drafts/*",))

    assert [path.relative_to(root.resolve()).as_posix() for path in documents] == [
        "docs/guide.md",
        "react/SKILL.md",
        "react/rules/_template.md",
    ]
