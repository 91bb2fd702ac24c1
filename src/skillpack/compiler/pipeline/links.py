"""Resolve relative Markdown links between skill documents into a link graph."""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from urllib.parse import unquote

from skillpack.constants.discovery import MARKDOWN_SUFFIX, README_FILENAME, SKILL_MARKDOWN_FILENAME
from skillpack.constants.parsing import MARKDOWN_LINK_PATTERN, URL_SCHEME_PATTERN
from skillpack.model import DanglingLinkWarning, LinkEdge, LinkGraph
from skillpack.parsers import iter_prose_lines

logger = logging.getLogger(__name__)

_DIRECTORY_INDEX_FILES: tuple[str, ...] = (SKILL_MARKDOWN_FILENAME, README_FILENAME)


@dataclass(frozen=True)
class LinkSource:
    """A document body to scan, identified by its root-relative id."""

    doc_id: str
    body: str
    start_line: int = 1


def extract_relative_links(body: str, *, start_line: int = 1) -> Iterator[tuple[int, str]]:
    """Yield ``(line, target)`` for relative links outside code.

    Absolute URLs, site-absolute paths, pure anchors and image links are
    skipped. Fragments and query strings are removed from the target.
    """
    for line_number, text in iter_prose_lines(body, start_line=start_line):
        for match in MARKDOWN_LINK_PATTERN.finditer(text):
            target = _clean_target(match.group("target"))
            if target:
                yield line_number, target


def resolve_target(source_id: str, target: str, known: frozenset[str]) -> tuple[bool, str | None]:
    """Resolve *target* relative to *source_id*.

    Returns ``(is_reference, resolved)``: ``is_reference`` is False for
    targets that are not document references (non-Markdown files);
    ``resolved`` is the known document id or None when dangling.
    """
    joined = posixpath.normpath(posixpath.join(posixpath.dirname(source_id), target))
    if joined == ".":
        joined = ""
    is_directory = target.endswith("/")
    suffix = posixpath.splitext(joined)[1]

    if not is_directory and suffix:
        if suffix.lower() != MARKDOWN_SUFFIX:
            return False, None
        return True, joined if joined in known else None

    for filename in _DIRECTORY_INDEX_FILES:
        candidate = posixpath.join(joined, filename) if joined else filename
        if candidate in known:
            return True, candidate
    # Extensionless targets that are not skill directories are not references.
    return is_directory, None


def build_link_graph(
    sources: Iterable[LinkSource],
    known: Iterable[str],
) -> tuple[LinkGraph, list[DanglingLinkWarning]]:
    """Scan every source for relative links and resolve them against *known*."""
    known_ids = frozenset(known)
    edges: list[LinkEdge] = []
    dangling: list[DanglingLinkWarning] = []
    seen_edges: set[tuple[str, str, int]] = set()

    for source in sorted(sources, key=lambda item: item.doc_id):
        for line, target in extract_relative_links(source.body, start_line=source.start_line):
            is_reference, resolved = resolve_target(source.doc_id, target, known_ids)
            if not is_reference:
                continue
            if resolved is None:
                warning = DanglingLinkWarning(source=source.doc_id, target=target, line=line)
                logger.warning("Dangling link: %s", warning.format())
                dangling.append(warning)
                continue
            key = (source.doc_id, resolved, line)
            if key in seen_edges:
                continue
            seen_edges.add(key)
            edges.append(LinkEdge(source=source.doc_id, target=resolved, line=line))

    graph = LinkGraph(nodes=tuple(sorted(known_ids)), edges=tuple(edges))
    return graph, dangling


def _clean_target(raw: str) -> str:
    target = raw.strip()
    if target.startswith("<") and target.endswith(">"):
        target = target[1:-1].strip()
    if not target or target.startswith(("#", "/")) or URL_SCHEME_PATTERN.match(target):
        return ""
    for marker in ("#", "?"):
        target = target.split(marker, 1)[0]
    return unquote(target)
