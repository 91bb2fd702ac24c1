"""Per-document errors raised while parsing and building records.

Each error knows how to render itself as a :class:`Violation` so the
orchestrator can collect them across files instead of failing fast.
"""

from __future__ import annotations

from pathlib import Path

from skillpack.constants.validation import DOC002, FLD001, FLD002, SEC001
from skillpack.exceptions.base import SkillpackError
from skillpack.exceptions.validation import Violation


class DocumentError(SkillpackError, ValueError):
    """Base class for errors tied to a single source document."""

    code: str = ""

    def __init__(self, path: Path | str, message: str, *, field: str = "", hint: str = "") -> None:
        self.path = str(path)
        self.field = field
        self.hint = hint
        self.detail = message
        super().__init__(f"{self.path}: {message}")

    def to_violation(self, display_path: str | None = None) -> Violation:
        """Convert to a violation, optionally with a root-relative path."""
        return Violation(
            code=self.code,
            path=display_path if display_path is not None else self.path,
            field=self.field,
            message=self.detail,
            hint=self.hint,
        )


class MalformedFrontMatterError(DocumentError):
    """Raised when a front matter block is unterminated or not a YAML mapping."""

    code = DOC002


class MissingRequiredFieldError(DocumentError):
    """Raised when a required front matter field is absent or blank."""

    code = FLD001

    def __init__(self, path: Path | str, field: str) -> None:
        super().__init__(path, f"missing required front matter field `{field}`", field=field)


class InvalidFieldError(DocumentError):
    """Raised when a front matter field has an unsupported value."""

    code = FLD002


class UnknownSectionError(DocumentError):
    """Raised when a rule references a section prefix its skill never declared."""

    code = SEC001

    def __init__(self, path: Path | str, prefix: str, *, declared: tuple[str, ...] = ()) -> None:
        hint = f"declared prefixes: {', '.join(declared)}" if declared else "no sections declared"
        super().__init__(path, f"unknown section prefix `{prefix}`", field="section", hint=hint)
        self.prefix = prefix
