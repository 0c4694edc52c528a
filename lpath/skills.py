"""Skill name registry.

Skills are referenced by name in a profile and by dense integer ordinal
everywhere else, so skill sets are plain sets of small ints.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from lpath.errors import InvalidSkillType

# Placeholder meaning "no skill". Profiles write [""] for "nothing required".
NO_SKILL = ""


@dataclass
class SkillRegistry:
    """Assigns each skill name an ordinal in first-seen order."""

    _ordinals: dict[str, int] = field(default_factory=dict)
    _names: list[str] = field(default_factory=list)
    _frozen: bool = field(default=False, compare=False)

    @classmethod
    def from_names(cls, names: Iterable[object]) -> SkillRegistry:
        """Create a registry from a profile's skill list.

        Raises:
            InvalidSkillType: If an entry is not a string.
        """
        registry = cls()
        for name in names:
            registry.register(name)
        return registry

    def register(self, name: object) -> int | None:
        """Register a skill name and return its ordinal.

        Registering an existing name returns the existing ordinal. The empty
        placeholder is ignored and yields None.

        Raises:
            InvalidSkillType: If the name is not a string.
            RuntimeError: If the registry has been frozen.
        """
        if self._frozen:
            raise RuntimeError("Skill registry is frozen")
        if not isinstance(name, str):
            raise InvalidSkillType(name)
        if name == NO_SKILL:
            return None
        ordinal = self._ordinals.get(name)
        if ordinal is None:
            ordinal = len(self._names)
            self._ordinals[name] = ordinal
            self._names.append(name)
        return ordinal

    def freeze(self) -> None:
        """Reject any further registration. A LevelGraph freezes its registry."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, name: str) -> int | None:
        """Get the ordinal of a skill, or None if not registered."""
        return self._ordinals.get(name)

    def name_of(self, ordinal: int) -> str:
        return self._names[ordinal]

    @property
    def names(self) -> list[str]:
        """Skill names ordered by ordinal."""
        return list(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._ordinals
