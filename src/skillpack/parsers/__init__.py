"""Markdown parsers for skill, rule and section files."""

from .frontmatter import parse_markdown_file, parse_markdown_text
from .markdown import iter_prose_lines
from .sections import SectionProblem, parse_sections_file, parse_sections_text

__all__ = [
    "SectionProblem",
    "iter_prose_lines",
    "parse_markdown_file",
    "parse_markdown_text",
    "parse_sections_file",
    "parse_sections_text",
]
