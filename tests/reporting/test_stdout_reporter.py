"""Tests for the stdout build summary."""

from __future__ import annotations

from pathlib import Path

from skillpack.compiler import compile_workspace
from skillpack.constants.bundle import ANSI_RESET
from skillpack.reporting.stdout import BuildReporter
from tests._fixtures.skill_tree import VALID_SKILL, TreeWriter


def test_render_plain_summary(basic_repo_root: Path) -> None:
    result = compile_workspace(root=basic_repo_root)

    output = BuildReporter(result, out_path=Path("bundle.json"), color=False).render()

    assert "Build summary" in output
    assert "Status           ok" in output
    assert "Rules            4" in output
    assert "react-best-practices" in output
    assert "CRITICAL=2" in output
    assert "Bundle           bundle.json" in output
    assert ANSI_RESET not in output


def test_render_colored_output_uses_ansi(basic_repo_root: Path) -> None:
    output = BuildReporter(compile_workspace(root=basic_repo_root), color=True).render()

    assert ANSI_RESET in output


def test_verbose_lists_diagnostics(write_tree: TreeWriter) -> None:
    root = write_tree({"react/SKILL.md": VALID_SKILL.format(name="react") + "\n[gone](missing.md)\n"})

    output = BuildReporter(compile_workspace(root=root), color=False, verbose=True).render()

    assert "Diagnostics" in output
    assert "dangling link to `missing.md`" in output


def test_render_without_skills(tmp_path: Path) -> None:
    output = BuildReporter(compile_workspace(root=tmp_path), color=False).render()

    assert "No skills found." in output
