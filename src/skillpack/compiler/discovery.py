"""File discovery for skill directories and their rule files."""

from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass
from pathlib import Path

from skillpack.constants.discovery import (
    MARKDOWN_SUFFIX,
    README_FILENAME,
    RULES_DIRNAME,
    SECTIONS_FILENAME,
    SKILL_MARKDOWN_FILENAME,
    UNPUBLISHED_PREFIX,
)
from skillpack.utils import relative_posix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkillSource:
    """Filesystem locations that make up one skill directory."""

    skill_file: Path
    readme: Path | None
    sections_file: Path | None
    rule_files: tuple[Path, ...]
    unpublished_files: tuple[Path, ...]

    @property
    def directory(self) -> Path:
        return self.skill_file.parent


def discover_skill_files(
    root: Path,
    skill_globs: tuple[str, ...],
    max_file_bytes: int,
    *,
    exclude: tuple[str, ...] = (),
) -> tuple[list[Path], list[str]]:
    """Discover SKILL.md files by configured glob patterns.

    Returns the files in stable root-relative order plus warnings for files
    that were skipped.
    """
    discovered: set[Path] = set()
    warnings: list[str] = []
    resolved_root = root.resolve()

    for pattern in skill_globs:
        for path in resolved_root.glob(pattern):
            if not path.is_file() or path.name != SKILL_MARKDOWN_FILENAME:
                continue
            relative = relative_posix(path, resolved_root)
            if _is_hidden(relative) or _is_excluded(relative, exclude):
                continue
            try:
                size = path.stat().st_size
            except OSError as exc:
                warnings.append(f"Cannot stat {relative}: {exc}")
                continue
            if size > max_file_bytes:
                warnings.append(f"Skipping {relative}: file exceeds {max_file_bytes} bytes")
                continue
            discovered.add(path.resolve())

    for warning in warnings:
        logger.warning(warning)
    return sorted(discovered, key=lambda path: relative_posix(path, resolved_root)), warnings


def collect_skill_source(skill_file: Path) -> SkillSource:
    """Collect README, sections file and rule files that belong to a skill."""
    directory = skill_file.parent
    readme = directory / README_FILENAME
    rules_dir = directory / RULES_DIRNAME

    rule_files: list[Path] = []
    unpublished: list[Path] = []
    sections_file: Path | None = None
    if rules_dir.is_dir():
        for path in sorted(rules_dir.iterdir(), key=lambda p: p.name):
            if not path.is_file() or path.suffix != MARKDOWN_SUFFIX:
                continue
            if path.name == SECTIONS_FILENAME:
                sections_file = path
            elif path.name.startswith(UNPUBLISHED_PREFIX):
                unpublished.append(path)
            else:
                rule_files.append(path)

    return SkillSource(
        skill_file=skill_file,
        readme=readme if readme.is_file() else None,
        sections_file=sections_file,
        rule_files=tuple(rule_files),
        unpublished_files=tuple(unpublished),
    )


def find_orphaned_rule_files(root: Path, *, exclude: tuple[str, ...] = ()) -> list[Path]:
    """Return rule files whose ``rules/`` directory has no sibling SKILL.md."""
    resolved_root = root.resolve()
    orphans: list[Path] = []
    for rules_dir in resolved_root.rglob(RULES_DIRNAME):
        relative = relative_posix(rules_dir, resolved_root)
        if not rules_dir.is_dir() or _is_hidden(relative) or _is_excluded(relative, exclude):
            continue
        if (rules_dir.parent / SKILL_MARKDOWN_FILENAME).is_file():
            continue
        orphans.extend(
            path
            for path in rules_dir.iterdir()
            if path.is_file() and path.suffix == MARKDOWN_SUFFIX and not path.name.startswith(UNPUBLISHED_PREFIX)
        )
    return sorted(orphans, key=lambda path: relative_posix(path, resolved_root))


def discover_markdown_documents(root: Path, *, exclude: tuple[str, ...] = ()) -> list[Path]:
    """Return every Markdown file under *root*, underscore files included.

    These are the documents a relative link may point at.
    """
    resolved_root = root.resolve()
    documents: list[Path] = []
    for path in resolved_root.rglob(f"*{MARKDOWN_SUFFIX}"):
        relative = relative_posix(path, resolved_root)
        if not path.is_file() or _is_hidden(relative) or _is_excluded(relative, exclude):
            continue
        documents.append(path)
    return sorted(documents, key=lambda path: relative_posix(path, resolved_root))


def _is_hidden(relative: str) -> bool:
    return any(part.startswith(".") for part in relative.split("/")[:-1])


def _is_excluded(relative: str, exclude: tuple[str, ...]) -> bool:
    return any(fnmatch.fnmatch(relative, pattern) for pattern in exclude)
