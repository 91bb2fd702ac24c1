"""Tests for front matter parsing."""

from pathlib import Path

import pytest

from skillpack.exceptions import MalformedFrontMatterError
from skillpack.parsers import parse_markdown_file, parse_markdown_text


def test_parse_rule_extracts_metadata_and_body(basic_repo_root: Path) -> None:
    path = basic_repo_root / "frontend" / "react-best-practices" / "rules" / "async-defer-await.md"
    parsed = parse_markdown_file(path)

    assert parsed.metadata["title"] == "Defer Await Until Needed"
    assert parsed.metadata["impact"] == "HIGH"
    assert parsed.metadata["tags"] == "async, await, conditional, optimization"
    assert parsed.body.startswith("## Defer Await Until Needed")
    assert parsed.body_start_line == 8


def test_parse_without_frontmatter_keeps_whole_text() -> None:
    parsed = parse_markdown_text("# Title\n\nText\n", Path("README.md"))

    assert parsed.metadata == {}
    assert parsed.body == "# Title\n\nText"
    assert parsed.body_start_line == 1


def test_parse_allows_empty_frontmatter() -> None:
    parsed = parse_markdown_text("---\n---\n# Title\n", Path("SKILL.md"))

    assert parsed.metadata == {}
    assert parsed.body == "# Title"
    assert parsed.body_start_line == 3


def test_parse_accepts_yaml_document_end_marker() -> None:
    parsed = parse_markdown_text("---\ntitle: Dots\n...\nBody\n", Path("rule.md"))

    assert parsed.metadata == {"title": "Dots"}
    assert parsed.body == "Body"


def test_parse_strips_byte_order_mark() -> None:
    parsed = parse_markdown_text("\ufeff---\ntitle: Bom\n---\nBody\n", Path("rule.md"))

    assert parsed.metadata == {"title": "Bom"}


def test_parse_raises_for_unterminated_frontmatter() -> None:
    with pytest.raises(MalformedFrontMatterError, match="unterminated"):
        parse_markdown_text("---\ntitle: missing-end\n# Broken\n", Path("rule.md"))


def test_parse_raises_for_invalid_yaml() -> None:
    with pytest.raises(MalformedFrontMatterError, match="invalid YAML"):
        parse_markdown_text("---\ntitle: [broken\n---\n# Broken\n", Path("rule.md"))


def test_parse_raises_for_non_mapping_frontmatter() -> None:
    with pytest.raises(MalformedFrontMatterError, match="must be a YAML mapping") as exc_info:
        parse_markdown_text("---\n- a\n- b\n---\nBody\n", Path("rule.md"))

    violation = exc_info.value.to_violation("skills/rule.md")
    assert violation.code == "DOC002"
    assert violation.path == "skills/rule.md"
