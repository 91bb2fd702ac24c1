"""Frozen dataclasses describing parsed documents, rules, skills and links."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from skillpack.exceptions.validation import Violation
from skillpack.types import ImpactLevel, JsonObject


@dataclass(frozen=True)
class ParsedDocument:
    """A Markdown file split into front matter metadata and body text."""

    path: Path
    raw_text: str
    metadata: dict[str, Any]
    body: str
    body_start_line: int = 1


@dataclass(frozen=True)
class SectionDefinition:
    """A section declared in ``rules/_sections.md``."""

    prefix: str
    name: str
    order: int
    impact: ImpactLevel | None = None
    description: str = ""

    def to_dict(self) -> JsonObject:
        return {
            "prefix": self.prefix,
            "name": self.name,
            "order": self.order,
            "impact": self.impact,
            "description": self.description,
        }


@dataclass(frozen=True)
class RuleRecord:
    """One published rule file of a skill."""

    id: str
    skill: str
    section: str
    title: str
    impact: ImpactLevel
    path: str
    body: str
    impact_description: str = ""
    tags: tuple[str, ...] = ()
    metadata: JsonObject = field(default_factory=dict)
    body_start_line: int = 1

    def to_dict(self) -> JsonObject:
        return {
            "id": self.id,
            "section": self.section,
            "title": self.title,
            "impact": self.impact,
            "impact_description": self.impact_description,
            "tags": list(self.tags),
            "metadata": self.metadata,
            "path": self.path,
            "body": self.body,
        }


@dataclass(frozen=True)
class SkillDocument:
    """A named collection of rule files rooted at a ``SKILL.md``."""

    name: str
    description: str
    category: str
    path: str
    body: str = ""
    readme: str | None = None
    layer: str = ""
    metadata: JsonObject = field(default_factory=dict)
    sections: tuple[SectionDefinition, ...] = ()
    rules: tuple[RuleRecord, ...] = ()
    body_start_line: int = 1

    @property
    def directory(self) -> str:
        """Root-relative posix directory of the skill."""
        head, _, _ = self.path.rpartition("/")
        return head

    @property
    def section_prefixes(self) -> tuple[str, ...]:
        return tuple(section.prefix for section in self.sections)


@dataclass(frozen=True)
class LinkEdge:
    """A resolved relative Markdown link between two documents."""

    source: str
    target: str
    line: int

    def to_dict(self) -> JsonObject:
        return {"source": self.source, "target": self.target, "line": self.line}


@dataclass(frozen=True)
class DanglingLinkWarning:
    """A relative Markdown link whose target does not resolve to a known document."""

    source: str
    target: str
    line: int

    def format(self) -> str:
        return f"{self.source}:{self.line} dangling link to `{self.target}`"

    def to_dict(self) -> JsonObject:
        return {"source": self.source, "target": self.target, "line": self.line}


@dataclass(frozen=True)
class LinkGraph:
    """Directed graph of document ids connected by relative Markdown links."""

    nodes: tuple[str, ...] = ()
    edges: tuple[LinkEdge, ...] = ()

    def outgoing(self, node: str) -> tuple[LinkEdge, ...]:
        """Edges whose source is *node*, in document order."""
        return tuple(edge for edge in self.edges if edge.source == node)

    def incoming(self, node: str) -> tuple[LinkEdge, ...]:
        """Edges whose target is *node*."""
        return tuple(edge for edge in self.edges if edge.target == node)

    def has_edge(self, source: str, target: str) -> bool:
        return any(edge.source == source and edge.target == target for edge in self.edges)

    def to_dict(self) -> JsonObject:
        return {
            "nodes": list(self.nodes),
            "edges": [edge.to_dict() for edge in self.edges],
        }


@dataclass(frozen=True)
class SectionIndex:
    """Rules of one skill grouped by section, in declaration then file order."""

    sections: tuple[SectionDefinition, ...] = ()
    rules_by_section: dict[str, tuple[RuleRecord, ...]] = field(default_factory=dict)

    def rules_for(self, prefix: str) -> tuple[RuleRecord, ...]:
        return self.rules_by_section.get(prefix, ())

    def ordered_rules(self) -> tuple[RuleRecord, ...]:
        """All indexed rules, section by section."""
        ordered: list[RuleRecord] = []
        for section in self.sections:
            ordered.extend(self.rules_for(section.prefix))
        return tuple(ordered)

    def by_impact(self) -> dict[str, tuple[str, ...]]:
        """Rule ids grouped by impact level."""
        grouped: dict[str, list[str]] = {}
        for rule in self.ordered_rules():
            grouped.setdefault(rule.impact, []).append(rule.id)
        return {impact: tuple(ids) for impact, ids in grouped.items()}


@dataclass(frozen=True)
class CompileResult:
    """Outcome of a single compilation run over a source tree."""

    root: Path
    skills: tuple[SkillDocument, ...]
    indexes: dict[str, SectionIndex]
    link_graph: LinkGraph
    dangling_links: tuple[DanglingLinkWarning, ...] = ()
    violations: tuple[Violation, ...] = ()
    warnings: tuple[str, ...] = ()
    shadowed_skills: tuple[str, ...] = ()
    layers: tuple[str, ...] = ()
    duration_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.violations

    @property
    def rule_count(self) -> int:
        return sum(len(skill.rules) for skill in self.skills)

    @property
    def section_count(self) -> int:
        return sum(len(skill.sections) for skill in self.skills)
