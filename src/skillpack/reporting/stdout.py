"""Human-readable stdout reporter for build results."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

from skillpack.constants.branding import ASCII_LOGO_LINES, BUILD_SUMMARY_TITLE
from skillpack.constants.bundle import ANSI_BOLD, ANSI_DIM, ANSI_GREEN, ANSI_RED, ANSI_RESET, ANSI_YELLOW, IMPACT_COLORS
from skillpack.constants.impact import IMPACT_LEVELS
from skillpack.model import CompileResult


def _colorize(text: str, color: str) -> str:
    return f"{color}{text}{ANSI_RESET}"


class BuildReporter:
    """Formats compile results as a short terminal summary."""

    def __init__(
        self,
        result: CompileResult,
        *,
        out_path: Path | None = None,
        color: bool = True,
        verbose: bool = False,
    ) -> None:
        """Initialise the reporter."""
        self._result = result
        self._out_path = out_path
        self._color = color
        self._verbose = verbose

    def render(self) -> str:
        """Render the full stdout report as a single string."""
        sections = [self._render_header(), self._render_skills_table(), self._render_impacts()]
        if self._verbose:
            sections.append(self._render_diagnostics())
        return "\n".join(section for section in sections if section)

    def _c(self, text: str, color: str) -> str:
        return _colorize(text, color) if self._color else text

    def _render_header(self) -> str:
        r = self._result
        sep = "  " + "─" * 38
        status = self._c("ok", ANSI_GREEN) if r.ok else self._c(f"{len(r.violations)} violation(s)", ANSI_RED)
        warnings = str(len(r.dangling_links))
        if r.dangling_links:
            warnings = self._c(warnings, ANSI_YELLOW)
        lines = [
            *(self._c(line, ANSI_BOLD) for line in ASCII_LOGO_LINES),
            "",
            f"  {BUILD_SUMMARY_TITLE}",
            sep,
            f"  Status           {status}",
            f"  Layers           {', '.join(r.layers)}",
            f"  Skills           {len(r.skills)}",
            f"  Sections         {r.section_count}",
            f"  Rules            {r.rule_count}",
            f"  Links            {len(r.link_graph.edges)}",
            f"  Dangling links   {warnings}",
            f"  Duration         {r.duration_seconds:.2f}s",
        ]
        if self._out_path is not None:
            lines.append(f"  Bundle           {self._out_path}")
        lines.append(sep)
        return "\n".join(lines)

    def _render_skills_table(self) -> str:
        skills = sorted(self._result.skills, key=lambda item: item.name)
        if not skills:
            return "  No skills found."
        width = max(len("Skill"), *(len(skill.name) for skill in skills))
        lines = [f"  {'Skill':<{width}}  {'Category':<20}  Sections  Rules"]
        for skill in skills:
            category = skill.category or "-"
            lines.append(f"  {skill.name:<{width}}  {category:<20}  {len(skill.sections):>8}  {len(skill.rules):>5}")
        return "\n".join(lines)

    def _render_impacts(self) -> str:
        counts = Counter(rule.impact for skill in self._result.skills for rule in skill.rules)
        if not counts:
            return ""
        parts = [
            f"{self._c(level, IMPACT_COLORS.get(level, ''))}={counts[level]}" for level in IMPACT_LEVELS if counts[level]
        ]
        return "  Impact: " + "  ".join(parts)

    def _render_diagnostics(self) -> str:
        r = self._result
        lines = [self._c("  Diagnostics", ANSI_DIM)]
        lines.extend(f"  - {warning}" for warning in r.warnings)
        lines.extend(f"  - {message}" for message in r.shadowed_skills)
        if len(lines) == 1:
            lines.append("  - none")
        return "\n".join(lines)
