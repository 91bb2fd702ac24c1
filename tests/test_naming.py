"""Tests for slug and name normalization."""

from __future__ import annotations

from pathlib import Path

import pytest

from skillpack.utils import relative_posix, sanitize_skill_name, slugify


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("async-defer-await", "async-defer-await"),
        ("Async_Defer  Await", "async-defer-await"),
        ("--js--cache--", "js-cache"),
        ("", "unnamed-rule"),
    ],
)
def test_slugify(raw: str, expected: str) -> None:
    assert slugify(raw) == expected


@pytest.mark.parametrize(
    ("raw_name", "expected"),
    [
        (" @Org/My Skill ", "org-my-skill"),
        ("....", "unnamed-skill"),
        ("React Best Practices", "react-best-practices"),
    ],
)
def test_sanitize_skill_name(raw_name: str, expected: str) -> None:
    assert sanitize_skill_name(raw_name) == expected


def test_relative_posix_falls_back_to_absolute(tmp_path: Path) -> None:
    inside = tmp_path / "a" / "b.md"

    assert relative_posix(inside, tmp_path) == "a/b.md"
    assert relative_posix(Path("/elsewhere/c.md"), tmp_path) == "/elsewhere/c.md"
