"""Structured violation model and the aggregate validation error."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from skillpack.exceptions.base import SkillpackError


@dataclass(frozen=True)
class Violation:
    """A single structural problem with stable code and location context."""

    code: str
    path: str
    field: str
    message: str
    hint: str = ""
    line: int | None = None

    def format(self) -> str:
        """Format as a human-readable single-line message."""
        location = self.path
        if self.line is not None:
            location = f"{location}:{self.line}"
        parts = [f"[{self.code}]", location, self.message]
        if self.hint:
            parts.append(f"({self.hint})")
        return " ".join(parts)


def sort_violations(violations: Iterable[Violation]) -> list[Violation]:
    """Sort violations deterministically by code, path, field, line."""
    return sorted(violations, key=lambda v: (v.code, v.path, v.field, v.line or 0, v.message))


def format_violations(violations: Iterable[Violation]) -> str:
    """Format violations as a multi-line string."""
    return "\n".join(v.format() for v in sort_violations(violations))


class ValidationError(SkillpackError):
    """Raised when a build collected one or more fatal violations."""

    def __init__(self, violations: Iterable[Violation]) -> None:
        self.violations: tuple[Violation, ...] = tuple(sort_violations(violations))
        count = len(self.violations)
        noun = "violation" if count == 1 else "violations"
        super().__init__(f"Build failed with {count} {noun}:\n{format_violations(self.violations)}")
