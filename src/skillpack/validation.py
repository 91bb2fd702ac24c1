"""Preflight validation shared by ``skillpack validate-config`` and ``skillpack compile``."""

from __future__ import annotations

from pathlib import Path

from skillpack.config import validate_config_file
from skillpack.constants.validation import CFG007
from skillpack.exceptions.validation import Violation, sort_violations


def preflight_validate(
    root: Path,
    config_path: Path | None = None,
    *,
    overlays: tuple[Path, ...] = (),
) -> list[Violation]:
    """Run source-tree and config checks and return violations in deterministic order.

    Returns an empty list when everything is valid.
    """
    violations: list[Violation] = []
    resolved_root = root.resolve()
    if not resolved_root.is_dir():
        violations.append(
            Violation(
                code=CFG007,
                path=str(resolved_root),
                field="",
                message=f"source directory does not exist: {resolved_root}",
            )
        )
        return sort_violations(violations)

    for overlay in overlays:
        resolved = overlay.resolve()
        if not resolved.is_dir():
            violations.append(
                Violation(
                    code=CFG007,
                    path=str(resolved),
                    field="overlay",
                    message=f"overlay directory does not exist: {resolved}",
                )
            )

    violations.extend(validate_config_file(root, config_path, config_explicit=config_path is not None))
    return sort_violations(violations)
