"""Parser for Markdown files with YAML front matter."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from skillpack.constants.parsing import FRONTMATTER_ALT_DELIMITER, FRONTMATTER_DELIMITER
from skillpack.exceptions import MalformedFrontMatterError
from skillpack.model import ParsedDocument


def parse_markdown_file(path: Path) -> ParsedDocument:
    """Read *path* and split it into front matter metadata and body."""
    return parse_markdown_text(path.read_text(encoding="utf-8"), path)


def parse_markdown_text(raw_text: str, path: Path) -> ParsedDocument:
    """Split raw Markdown text into front matter metadata and body."""
    normalized = raw_text.lstrip("\ufeff")
    lines = normalized.splitlines()

    metadata: dict[str, Any] = {}
    body_lines = lines

    if lines and lines[0].strip() == FRONTMATTER_DELIMITER:
        frontmatter_end = _find_frontmatter_end(lines)
        if frontmatter_end is None:
            raise MalformedFrontMatterError(path, "unterminated front matter block")

        frontmatter_text = "\n".join(lines[1:frontmatter_end])
        try:
            payload = yaml.safe_load(frontmatter_text) if frontmatter_text.strip() else None
        except yaml.YAMLError as exc:
            raise MalformedFrontMatterError(path, f"invalid YAML in front matter: {_first_line(exc)}") from exc

        if isinstance(payload, dict):
            metadata = {str(key): value for key, value in payload.items()}
        elif payload is not None:
            raise MalformedFrontMatterError(
                path,
                f"front matter must be a YAML mapping, got {type(payload).__name__}",
            )

        body_lines = lines[frontmatter_end + 1 :]

    # Leading blank lines are dropped from the body; keep the line offset honest.
    skipped = 0
    while skipped < len(body_lines) and not body_lines[skipped].strip():
        skipped += 1
    body_start = len(lines) - len(body_lines) + skipped + 1

    return ParsedDocument(
        path=path,
        raw_text=raw_text,
        metadata=metadata,
        body="\n".join(body_lines[skipped:]).rstrip(),
        body_start_line=body_start,
    )


def _find_frontmatter_end(lines: list[str]) -> int | None:
    for index in range(1, len(lines)):
        if lines[index].strip() in {FRONTMATTER_DELIMITER, FRONTMATTER_ALT_DELIMITER}:
            return index
    return None


def _first_line(exc: yaml.YAMLError) -> str:
    return str(exc).strip().splitlines()[0] if str(exc).strip() else exc.__class__.__name__
