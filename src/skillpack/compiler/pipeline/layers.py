"""Layered skill lookup: higher-priority layers shadow lower ones by skill name."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from skillpack.model import SkillDocument


@dataclass(frozen=True)
class SkillLayer:
    """One source tree of skills, keyed by skill name."""

    name: str
    root: Path
    skills: Mapping[str, SkillDocument] = field(default_factory=dict)


class LayeredSkillIndex:
    """Lookup through an ordered list of layers, highest priority first."""

    def __init__(self, layers: Sequence[SkillLayer]) -> None:
        self._layers = tuple(layers)

    @property
    def layers(self) -> tuple[SkillLayer, ...]:
        return self._layers

    def get(self, name: str) -> SkillDocument | None:
        """Return the first skill named *name*, walking layers in priority order."""
        for layer in self._layers:
            skill = layer.skills.get(name)
            if skill is not None:
                return skill
        return None

    def names(self) -> tuple[str, ...]:
        """All visible skill names, sorted."""
        return tuple(sorted({name for layer in self._layers for name in layer.skills}))

    def effective_skills(self) -> tuple[SkillDocument, ...]:
        """The winning skill for every visible name, sorted by name."""
        resolved: list[SkillDocument] = []
        for name in self.names():
            skill = self.get(name)
            if skill is not None:
                resolved.append(skill)
        return tuple(resolved)

    def shadowed(self) -> tuple[tuple[str, str, str], ...]:
        """``(skill, hidden_layer, winning_layer)`` for every shadowed definition."""
        hidden: list[tuple[str, str, str]] = []
        for name in self.names():
            owners = [layer.name for layer in self._layers if name in layer.skills]
            hidden.extend((name, owner, owners[0]) for owner in owners[1:])
        return tuple(hidden)
