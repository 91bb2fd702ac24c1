"""Core data models for Skillpack."""

from .entities import (
    CompileResult,
    DanglingLinkWarning,
    LinkEdge,
    LinkGraph,
    ParsedDocument,
    RuleRecord,
    SectionDefinition,
    SectionIndex,
    SkillDocument,
)

__all__ = [
    "CompileResult",
    "DanglingLinkWarning",
    "LinkEdge",
    "LinkGraph",
    "ParsedDocument",
    "RuleRecord",
    "SectionDefinition",
    "SectionIndex",
    "SkillDocument",
]
