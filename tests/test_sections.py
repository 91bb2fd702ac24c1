"""Tests for ``_sections.md`` parsing."""

from pathlib import Path

from skillpack.parsers import parse_sections_file, parse_sections_text


def test_parse_sections_fixture_in_declaration_order(basic_repo_root: Path) -> None:
    path = basic_repo_root / "frontend" / "react-best-practices" / "rules" / "_sections.md"
    sections, problems = parse_sections_file(path)

    assert problems == ()
    assert [section.prefix for section in sections] == ["async", "bundle", "rerender"]
    assert [section.order for section in sections] == [1, 2, 3]
    first = sections[0]
    assert first.name == "Eliminating Waterfalls"
    assert first.impact == "CRITICAL"
    assert first.description == "Waterfalls are the top performance killer."


def test_parse_sections_without_numbers_and_impact() -> None:
    text = "## JavaScript Performance (js)\n\nSome prose.\n"
    sections, problems = parse_sections_text(text, Path("_sections.md"))

    assert problems == ()
    assert len(sections) == 1
    assert sections[0].prefix == "js"
    assert sections[0].impact is None
    assert sections[0].description == ""


def test_parse_sections_reports_heading_without_prefix() -> None:
    text = "## 1. Waterfalls (async)\n\n## 2. Missing Prefix\n"
    sections, problems = parse_sections_text(text, Path("_sections.md"))

    assert [section.prefix for section in sections] == ["async"]
    assert len(problems) == 1
    assert problems[0].code == "SEC004"
    assert problems[0].line == 3


def test_parse_sections_reports_duplicate_prefix() -> None:
    text = "## 1. First (async)\n\n## 2. Second (async)\n"
    sections, problems = parse_sections_text(text, Path("_sections.md"))

    assert len(sections) == 1
    assert sections[0].name == "First"
    assert [problem.code for problem in problems] == ["SEC002"]


def test_parse_sections_reports_unknown_impact() -> None:
    text = "## 1. First (async)\n\n**Impact:** SEVERE\n"
    sections, problems = parse_sections_text(text, Path("_sections.md"))

    assert sections[0].impact is None
    assert [problem.code for problem in problems] == ["FLD002"]


def test_parse_sections_accepts_impact_spellings_rules_accept() -> None:
    text = "## 1. First (async)\n\n**Impact:** Medium High\n\n## 2. Second (bundle)\n\n**Impact:** low_medium\n"
    sections, problems = parse_sections_text(text, Path("_sections.md"))

    assert problems == ()
    assert [section.impact for section in sections] == ["MEDIUM-HIGH", "LOW-MEDIUM"]


def test_parse_sections_ignores_headings_in_code_blocks() -> None:
    text = "## 1. Real (real)\n\n```md\n## 2. Fake (fake)\n```\n"
    sections, problems = parse_sections_text(text, Path("_sections.md"))

    assert [section.prefix for section in sections] == ["real"]
    assert problems == ()
