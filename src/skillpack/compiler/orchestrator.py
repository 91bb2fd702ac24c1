"""End-to-end compilation of a skill source tree into a bundle.

``compile_workspace`` runs Discover -> Parse -> Build -> Index -> Resolve ->
Validate and returns a :class:`CompileResult`; ``build_bundle`` additionally
fails on violations and emits the bundle file.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from skillpack.compiler.discovery import (
    SkillSource,
    collect_skill_source,
    discover_markdown_documents,
    discover_skill_files,
    find_orphaned_rule_files,
)
from skillpack.compiler.pipeline.checks import (
    check_duplicate_rule_ids,
    check_duplicate_skill_names,
    check_orphaned_rules,
    check_published_set,
    check_sections_declared,
)
from skillpack.compiler.pipeline.index import build_section_index
from skillpack.compiler.pipeline.layers import LayeredSkillIndex, SkillLayer
from skillpack.compiler.pipeline.links import LinkSource, build_link_graph
from skillpack.compiler.pipeline.records import (
    build_rule_record,
    build_skill_header,
    collect_rule_errors,
    collect_skill_errors,
    fallback_skill_header,
)
from skillpack.config import SkillpackConfig, load_config
from skillpack.constants.bundle import BASE_LAYER_NAME
from skillpack.constants.validation import DOC001, LNK001
from skillpack.exceptions import ConfigError, MalformedFrontMatterError, ValidationError, Violation
from skillpack.exceptions.validation import sort_violations
from skillpack.model import (
    CompileResult,
    ParsedDocument,
    RuleRecord,
    SectionDefinition,
    SectionIndex,
    SkillDocument,
)
from skillpack.parsers import parse_markdown_file, parse_sections_file
from skillpack.utils import relative_posix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _CompiledSkill:
    skill: SkillDocument
    index: SectionIndex
    link_sources: tuple[LinkSource, ...]


class _LayerCompiler:
    """Compiles every skill under one layer root, collecting problems."""

    def __init__(
        self,
        *,
        name: str,
        layer_root: Path,
        root: Path,
        config: SkillpackConfig,
        skip_roots: tuple[Path, ...] = (),
    ) -> None:
        self.name = name
        self.layer_root = layer_root
        self.root = root
        self.config = config
        self.skip_roots = skip_roots
        self.violations: list[Violation] = []
        self.warnings: list[str] = []
        self.document_ids: list[str] = []

    def doc_id(self, path: Path) -> str:
        """Root-relative id; documents outside the root are namespaced by layer."""
        if path.is_relative_to(self.root):
            return relative_posix(path, self.root)
        return f"{self.name}/{relative_posix(path, self.layer_root)}"

    def compile(self) -> tuple[SkillLayer, dict[str, _CompiledSkill], list[SkillDocument]]:
        skill_files, skipped = discover_skill_files(
            self.layer_root,
            self.config.skill_globs,
            self.config.max_file_bytes,
            exclude=self.config.exclude,
        )
        self.warnings.extend(skipped)

        compiled: dict[str, _CompiledSkill] = {}
        all_skills: list[SkillDocument] = []
        for skill_file in skill_files:
            if self._is_skipped(skill_file):
                continue
            entry = self._compile_skill(collect_skill_source(skill_file))
            if entry is None:
                continue
            all_skills.append(entry.skill)
            compiled.setdefault(entry.skill.name, entry)

        orphans = [
            self.doc_id(path)
            for path in find_orphaned_rule_files(self.layer_root, exclude=self.config.exclude)
            if not self._is_skipped(path)
        ]
        self.violations.extend(check_orphaned_rules(orphans))
        self.document_ids = [
            self.doc_id(path)
            for path in discover_markdown_documents(self.layer_root, exclude=self.config.exclude)
            if not self._is_skipped(path)
        ]

        logger.info("Layer %s: compiled %d skill(s) from %s", self.name, len(compiled), self.layer_root)
        layer = SkillLayer(
            name=self.name,
            root=self.layer_root,
            skills={name: entry.skill for name, entry in compiled.items()},
        )
        return layer, compiled, all_skills

    def _is_skipped(self, path: Path) -> bool:
        return any(path.is_relative_to(skip) for skip in self.skip_roots)

    def _is_oversized(self, path: Path) -> bool:
        if path.stat().st_size <= self.config.max_file_bytes:
            return False
        message = f"Skipping {self.doc_id(path)}: file exceeds {self.config.max_file_bytes} bytes"
        logger.warning(message)
        self.warnings.append(message)
        return True

    def _read_error(self, path: Path, exc: Exception) -> None:
        self.violations.append(
            Violation(code=DOC001, path=self.doc_id(path), field="", message=f"cannot read file: {exc}")
        )

    def _parse(self, path: Path) -> ParsedDocument | None:
        try:
            if self._is_oversized(path):
                return None
            return parse_markdown_file(path)
        except MalformedFrontMatterError as exc:
            self.violations.append(exc.to_violation(self.doc_id(path)))
        except (OSError, UnicodeDecodeError) as exc:
            self._read_error(path, exc)
        return None

    def _parse_sections(self, path: Path) -> tuple[SectionDefinition, ...]:
        sections_id = self.doc_id(path)
        try:
            if self._is_oversized(path):
                return ()
            sections, problems = parse_sections_file(path)
        except MalformedFrontMatterError as exc:
            self.violations.append(exc.to_violation(sections_id))
            return ()
        except (OSError, UnicodeDecodeError) as exc:
            self._read_error(path, exc)
            return ()
        self.violations.extend(
            Violation(code=problem.code, path=sections_id, field="", message=problem.message, line=problem.line)
            for problem in problems
        )
        return sections

    def _compile_skill(self, source: SkillSource) -> _CompiledSkill | None:
        """Compile one skill directory.

        A ``SKILL.md`` that cannot be parsed still has its README, sections
        and rules checked, but the skill is left out of the published set.
        """
        skill_id = self.doc_id(source.skill_file)
        parsed = self._parse(source.skill_file)
        link_sources: list[LinkSource] = []
        if parsed is not None:
            for error in collect_skill_errors(parsed, required_fields=self.config.required_skill_fields):
                self.violations.append(error.to_violation(skill_id))
            header = build_skill_header(parsed)
            link_sources.append(LinkSource(doc_id=skill_id, body=parsed.body, start_line=parsed.body_start_line))
        else:
            header = fallback_skill_header(source.skill_file)

        readme_id: str | None = None
        if source.readme is not None:
            readme = self._parse(source.readme)
            if readme is not None:
                readme_id = self.doc_id(source.readme)
                link_sources.append(LinkSource(doc_id=readme_id, body=readme.body, start_line=readme.body_start_line))

        sections: tuple[SectionDefinition, ...] = ()
        if source.sections_file is not None:
            sections = self._parse_sections(source.sections_file)
        declared = tuple(section.prefix for section in sections)

        for template in source.unpublished_files:
            logger.debug("Excluding unpublished file %s", self.doc_id(template))

        rules: list[RuleRecord] = []
        for rule_file in source.rule_files:
            rule_id = self.doc_id(rule_file)
            parsed_rule = self._parse(rule_file)
            if parsed_rule is None:
                continue
            errors = collect_rule_errors(parsed_rule, required_fields=self.config.required_rule_fields)
            if errors:
                self.violations.extend(error.to_violation(rule_id) for error in errors)
                continue
            record = build_rule_record(
                parsed_rule,
                skill=header.name,
                path_id=rule_id,
                declared_prefixes=declared,
                required_fields=self.config.required_rule_fields,
            )
            rules.append(record)
            link_sources.append(LinkSource(doc_id=rule_id, body=record.body, start_line=record.body_start_line))

        index, unknown_sections = build_section_index(sections, rules)
        self.violations.extend(error.to_violation() for error in unknown_sections)

        skill_dir = source.directory
        category = relative_posix(skill_dir.parent, self.layer_root) if skill_dir != self.layer_root else ""
        skill = SkillDocument(
            name=header.name,
            description=header.description,
            category="" if category == "." else category,
            path=skill_id,
            body=parsed.body if parsed is not None else "",
            readme=readme_id,
            layer=self.name,
            metadata=header.metadata,
            sections=sections,
            rules=tuple(rules),
            body_start_line=parsed.body_start_line if parsed is not None else 1,
        )
        self.violations.extend(check_duplicate_rule_ids(skill))
        self.violations.extend(check_published_set(skill))
        self.violations.extend(check_sections_declared(skill, has_sections_file=source.sections_file is not None))
        if parsed is None:
            logger.debug("Leaving %s out of the bundle: SKILL.md could not be parsed", skill_id)
            return None
        return _CompiledSkill(skill=skill, index=index, link_sources=tuple(link_sources))


def compile_workspace(
    *,
    root: Path,
    config_path: Path | None = None,
    overlays: tuple[Path, ...] = (),
    strict_links: bool | None = None,
) -> CompileResult:
    """Compile a skill source tree and collect every warning and violation."""
    started_at = time.perf_counter()
    root = root.resolve()
    if not root.is_dir():
        raise ConfigError(f"Source root does not exist or is not a directory: {root}")

    config = load_config(root, config_path)
    effective_strict = config.strict_links if strict_links is None else strict_links
    layer_roots = _resolve_layer_roots(root, overlays, config)
    overlay_roots = tuple(path for _, path in layer_roots[:-1])

    violations: list[Violation] = []
    warnings: list[str] = []
    layers: list[SkillLayer] = []
    compiled: dict[tuple[str, str], _CompiledSkill] = {}
    all_skills: list[SkillDocument] = []
    known: set[str] = set()

    for position, (name, layer_root) in enumerate(layer_roots):
        compiler = _LayerCompiler(
            name=name,
            layer_root=layer_root,
            root=root,
            config=config,
            skip_roots=overlay_roots if position == len(layer_roots) - 1 else (),
        )
        layer, entries, layer_skills = compiler.compile()
        layers.append(layer)
        all_skills.extend(layer_skills)
        compiled.update({(name, skill_name): entry for skill_name, entry in entries.items()})
        violations.extend(compiler.violations)
        warnings.extend(compiler.warnings)
        known.update(compiler.document_ids)

    violations.extend(check_duplicate_skill_names(all_skills))

    lookup = LayeredSkillIndex(layers)
    shadowed: list[str] = []
    for skill_name, hidden_layer, winner in lookup.shadowed():
        message = f"Skill '{skill_name}' from layer '{hidden_layer}' is shadowed by layer '{winner}'"
        shadowed.append(message)
        logger.info(message)

    effective = lookup.effective_skills()
    effective_entries = [compiled[(skill.layer, skill.name)] for skill in effective]
    for skill in effective:
        known.add(skill.path)
        if skill.readme is not None:
            known.add(skill.readme)
        known.update(rule.path for rule in skill.rules)

    link_graph, dangling = build_link_graph(
        (source for entry in effective_entries for source in entry.link_sources),
        known,
    )
    for warning in dangling:
        warnings.append(f"Dangling link: {warning.format()}")
        if effective_strict:
            violations.append(
                Violation(
                    code=LNK001,
                    path=warning.source,
                    field="",
                    message=f"dangling link to `{warning.target}`",
                    line=warning.line,
                )
            )

    duration_seconds = time.perf_counter() - started_at
    return CompileResult(
        root=root,
        skills=effective,
        indexes={entry.skill.name: entry.index for entry in effective_entries},
        link_graph=link_graph,
        dangling_links=tuple(dangling),
        violations=tuple(sort_violations(violations)),
        warnings=tuple(warnings),
        shadowed_skills=tuple(shadowed),
        layers=tuple(name for name, _ in layer_roots),
        duration_seconds=duration_seconds,
    )


def ensure_valid(result: CompileResult) -> None:
    """Raise :class:`ValidationError` listing every violation of *result*."""
    if result.violations:
        raise ValidationError(result.violations)


def build_bundle(
    *,
    root: Path,
    out: Path,
    config_path: Path | None = None,
    overlays: tuple[Path, ...] = (),
    strict_links: bool | None = None,
) -> CompileResult:
    """Compile *root*, fail on violations, and write the bundle to *out*."""
    from skillpack.reporting.bundle import write_bundle

    result = compile_workspace(
        root=root,
        config_path=config_path,
        overlays=overlays,
        strict_links=strict_links,
    )
    ensure_valid(result)
    write_bundle(out, result)
    logger.info("Wrote bundle with %d skill(s) and %d rule(s) to %s", len(result.skills), result.rule_count, out)
    return result


def _resolve_layer_roots(
    root: Path,
    overlays: tuple[Path, ...],
    config: SkillpackConfig,
) -> list[tuple[str, Path]]:
    """Overlay layers in priority order (CLI before config), then the base layer."""
    candidates = [*(path for path in overlays), *(root / item for item in config.overlays)]
    resolved_layers: list[tuple[str, Path]] = []
    seen: set[Path] = {root}
    for candidate in candidates:
        resolved = candidate.resolve()
        if not resolved.is_dir():
            raise ConfigError(f"Overlay directory does not exist: {resolved}")
        if resolved in seen:
            continue
        seen.add(resolved)
        name = relative_posix(resolved, root) if resolved.is_relative_to(root) else resolved.name
        taken = {BASE_LAYER_NAME, *(existing for existing, _ in resolved_layers)}
        if name in taken:
            name = f"{name}-{len(resolved_layers) + 1}"
        resolved_layers.append((name, resolved))
    resolved_layers.append((BASE_LAYER_NAME, root))
    return resolved_layers
