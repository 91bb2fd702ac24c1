"""Serialize a compile result into the bundle artifact."""

from __future__ import annotations

from pathlib import Path

from skillpack import __version__
from skillpack.constants.bundle import BUNDLE_SCHEMA_VERSION, BUNDLE_TEMP_PREFIX, BUNDLE_TEMP_SUFFIX
from skillpack.io import dumps_canonical, write_json_atomic
from skillpack.model import CompileResult, SectionIndex, SkillDocument
from skillpack.types import JsonObject


def render_bundle(result: CompileResult) -> JsonObject:
    """Build the bundle payload.

    Skills are ordered by name, sections by declaration order and rules by
    section then file order. Nothing run-dependent (timestamps, absolute
    paths, durations) is included so unchanged input renders identically.
    """
    skills = [
        _render_skill(skill, result.indexes.get(skill.name, SectionIndex()))
        for skill in sorted(result.skills, key=lambda item: item.name)
    ]
    return {
        "schema_version": BUNDLE_SCHEMA_VERSION,
        "generator": f"skillpack {__version__}",
        "layers": list(result.layers),
        "counts": {
            "skills": len(result.skills),
            "sections": result.section_count,
            "rules": result.rule_count,
            "links": len(result.link_graph.edges),
            "dangling_links": len(result.dangling_links),
        },
        "skills": skills,
        "links": {
            **result.link_graph.to_dict(),
            "dangling": [warning.to_dict() for warning in result.dangling_links],
        },
    }


def serialize_bundle(result: CompileResult) -> str:
    """Render the bundle as canonical JSON text."""
    return dumps_canonical(render_bundle(result))


def write_bundle(path: Path, result: CompileResult) -> None:
    """Write the bundle atomically to *path*."""
    write_json_atomic(
        path=path,
        payload=render_bundle(result),
        temp_prefix=BUNDLE_TEMP_PREFIX,
        temp_suffix=BUNDLE_TEMP_SUFFIX,
    )


def _render_skill(skill: SkillDocument, index: SectionIndex) -> JsonObject:
    sections = []
    for section in index.sections:
        payload = section.to_dict()
        payload["rules"] = [rule.id for rule in index.rules_for(section.prefix)]
        sections.append(payload)

    return {
        "name": skill.name,
        "description": skill.description,
        "category": skill.category,
        "layer": skill.layer,
        "path": skill.path,
        "readme": skill.readme,
        "metadata": skill.metadata,
        "body": skill.body,
        "sections": sections,
        "rules": [rule.to_dict() for rule in index.ordered_rules()],
        "rules_by_impact": {impact: list(ids) for impact, ids in index.by_impact().items()},
    }
