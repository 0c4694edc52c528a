"""Level graph data structures for lpath.

This module contains the immutable graph of stages, their unlockable skills
and the skill-gated transitions between them. Stages and skills are indexed
by dense ordinals; names only matter at the edges of the program.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from lpath.config import SUPPORTED_VERSION, check_format_version
from lpath.errors import (
    BadFieldType,
    BadStageDefinition,
    DuplicateStageID,
    InvalidSkillType,
    MissingStageID,
    NoEndStageDefined,
    NoStagesDefined,
)
from lpath.skills import NO_SKILL, SkillRegistry

if TYPE_CHECKING:
    from lpath.config import ProfileConfig


@dataclass(frozen=True)
class Edge:
    """A directed transition between two stages.

    A stage has at most one edge to any given destination: the model tracks
    one conceptual exit per destination, not every physical door.
    """

    source: int
    target: int
    required_skills: frozenset[int] = frozenset()

    def is_enabled(self, unlocked_skills: set[int] | frozenset[int]) -> bool:
        """True if every required skill has been unlocked."""
        return self.required_skills <= unlocked_skills


@dataclass(frozen=True)
class Stage:
    """A stage of the game, identified by its `id`."""

    ordinal: int
    id: str
    description: str = ""
    begin_game: bool = False
    end_game: bool = False
    unlockable_skills: frozenset[int] = frozenset()
    edges: tuple[Edge, ...] = ()


@dataclass(frozen=True)
class UnresolvedReference:
    """A name the graph build dropped because nothing matched it.

    Attributes:
        stage_id: Stage whose record holds the reference.
        kind: "unlock-skill", "required-skill" or "next-stage".
        name: The unmatched name, as written in the profile.
    """

    stage_id: str
    kind: str
    name: str

    def describe(self) -> str:
        if self.kind == "next-stage":
            return f"Stage '{self.stage_id}': unknown next stage '{self.name}'"
        return f"Stage '{self.stage_id}': unknown {self.kind} '{self.name}'"


@dataclass(frozen=True)
class LevelGraph:
    """The complete, validated level graph.

    Built once with build() or from_config() and never mutated afterwards,
    so it can be shared by every exploration.
    """

    stages: tuple[Stage, ...]
    skills: SkillRegistry
    version: int = SUPPORTED_VERSION
    unresolved: tuple[UnresolvedReference, ...] = ()
    _by_id: Mapping[str, int] = field(
        default_factory=dict, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        by_id = self._by_id or {s.id: s.ordinal for s in self.stages}
        # frozen dataclass: bypass __setattr__ to install the read-only index
        object.__setattr__(self, "_by_id", MappingProxyType(dict(by_id)))
        self.skills.freeze()

    @classmethod
    def from_config(cls, profile: ProfileConfig) -> LevelGraph:
        """Build a graph from a loaded profile."""
        return cls.build(profile.stages, profile.skills, profile.version)

    @classmethod
    def build(
        cls,
        stages: Sequence[Any],
        skills: Iterable[object],
        version: object = SUPPORTED_VERSION,
    ) -> LevelGraph:
        """Validate raw stage records and build the graph.

        Destinations may reference stages defined later in the list, so the
        build runs in two passes: the first assigns ordinals and reads the
        per-stage fields, the second resolves transitions.

        Args:
            stages: Raw stage records (one table per stage).
            skills: Skill names; "" placeholders are ignored.
            version: Profile format version.

        Returns:
            The built LevelGraph.

        Raises:
            ProfileError: Any format or structural problem (see lpath.errors).
        """
        version = check_format_version(version)
        registry = SkillRegistry.from_names(skills)

        if not stages:
            raise NoStagesDefined()

        unresolved: list[UnresolvedReference] = []
        by_id: dict[str, int] = {}
        fields: list[dict[str, Any]] = []

        # Pass 1: identity, flags, unlockable skills
        for index, record in enumerate(stages):
            if not isinstance(record, dict):
                raise BadStageDefinition(index, "not a table")

            stage_id = record.get("id")
            if stage_id is None or stage_id == "":
                raise MissingStageID(index)
            if not isinstance(stage_id, str):
                raise BadStageDefinition(index, "'id' must be a string")
            if stage_id in by_id:
                raise DuplicateStageID(stage_id, index)
            by_id[stage_id] = index

            description = record.get("description", "")
            if not isinstance(description, str):
                raise BadFieldType("description", "a string", description)

            fields.append(
                {
                    "id": stage_id,
                    "description": description,
                    "begin_game": _get_flag(record, "begin"),
                    "end_game": _get_flag(record, "end"),
                    "unlockable_skills": _resolve_unlock_skills(
                        record, index, registry, unresolved
                    ),
                }
            )

        # Pass 2: transitions, now that every id has an ordinal
        built: list[Stage] = []
        for index, record in enumerate(stages):
            edges = _resolve_transitions(record, index, by_id, registry, unresolved)
            built.append(Stage(ordinal=index, edges=edges, **fields[index]))

        if not any(stage.end_game for stage in built):
            raise NoEndStageDefined()

        return cls(
            stages=tuple(built),
            skills=registry,
            version=version,
            unresolved=tuple(unresolved),
            _by_id=by_id,
        )

    def stage(self, ordinal: int) -> Stage:
        """Get a stage by ordinal."""
        return self.stages[ordinal]

    def stage_by_id(self, stage_id: str) -> Stage | None:
        """Get a stage by id, or None if not found."""
        ordinal = self._by_id.get(stage_id)
        return None if ordinal is None else self.stages[ordinal]

    def ordinal_of(self, stage_id: str) -> int | None:
        return self._by_id.get(stage_id)

    def begin_stages(self) -> list[Stage]:
        """Get all stages flagged begin = true, in ordinal order."""
        return [s for s in self.stages if s.begin_game]

    def end_stages(self) -> list[Stage]:
        """Get all stages flagged end = true, in ordinal order."""
        return [s for s in self.stages if s.end_game]

    @property
    def edges(self) -> list[Edge]:
        """All edges, grouped by source ordinal."""
        return [edge for stage in self.stages for edge in stage.edges]

    def outgoing_edges(self, ordinal: int) -> tuple[Edge, ...]:
        """Get all edges originating from a stage."""
        return self.stages[ordinal].edges

    def incoming_edges(self, ordinal: int) -> list[Edge]:
        """Get all edges targeting a stage."""
        return [e for e in self.edges if e.target == ordinal]

    def skill_names(self, ordinals: Iterable[int]) -> list[str]:
        """Convert skill ordinals to names, ordered by ordinal."""
        return [self.skills.name_of(o) for o in sorted(ordinals)]

    def track_ids(self, track: Iterable[int]) -> list[str]:
        """Convert a track of stage ordinals to stage ids."""
        return [self.stages[o].id for o in track]

    def transition_matrix(self) -> list[list[bool]]:
        """Adjacency matrix: matrix[a][b] is True if a has an edge to b."""
        size = len(self.stages)
        matrix = [[False] * size for _ in range(size)]
        for edge in self.edges:
            matrix[edge.source][edge.target] = True
        return matrix

    def reachable_from(self, ordinals: Iterable[int]) -> set[int]:
        """Find all stages reachable from the given ones via BFS.

        Skill requirements are ignored: this answers "is there any edge
        sequence", not "can a player get there".
        """
        reachable: set[int] = set()
        queue: deque[int] = deque(ordinals)

        while queue:
            ordinal = queue.popleft()
            if ordinal in reachable:
                continue
            reachable.add(ordinal)
            for edge in self.outgoing_edges(ordinal):
                if edge.target not in reachable:
                    queue.append(edge.target)

        return reachable

    def reaching(self, ordinals: Iterable[int]) -> set[int]:
        """Find all stages that can reach one of the given ones (reverse BFS)."""
        incoming: dict[int, list[int]] = {s.ordinal: [] for s in self.stages}
        for edge in self.edges:
            incoming[edge.target].append(edge.source)

        can_reach: set[int] = set()
        queue: deque[int] = deque(ordinals)

        while queue:
            ordinal = queue.popleft()
            if ordinal in can_reach:
                continue
            can_reach.add(ordinal)
            for source in incoming[ordinal]:
                if source not in can_reach:
                    queue.append(source)

        return can_reach

    def __len__(self) -> int:
        return len(self.stages)


def _get_flag(record: dict[str, Any], key: str) -> bool:
    value = record.get(key, False)
    if not isinstance(value, bool):
        raise BadFieldType(key, "a boolean", value)
    return value


def _resolve_unlock_skills(
    record: dict[str, Any],
    index: int,
    registry: SkillRegistry,
    unresolved: list[UnresolvedReference],
) -> frozenset[int]:
    """Resolve a stage's unlock-skills list into skill ordinals.

    Unknown names are dropped and recorded in `unresolved`.
    """
    names = record.get("unlock-skills", [])
    if not isinstance(names, list):
        raise BadStageDefinition(index, "'unlock-skills' must be a list")

    skills: set[int] = set()
    for name in names:
        if not isinstance(name, str):
            raise InvalidSkillType(name, field_name="unlock-skills")
        if name == NO_SKILL:
            continue
        ordinal = registry.lookup(name)
        if ordinal is None:
            unresolved.append(UnresolvedReference(record["id"], "unlock-skill", name))
        else:
            skills.add(ordinal)
    return frozenset(skills)


def _resolve_transitions(
    record: dict[str, Any],
    index: int,
    by_id: dict[str, int],
    registry: SkillRegistry,
    unresolved: list[UnresolvedReference],
) -> tuple[Edge, ...]:
    """Resolve a stage's next-stage table into edges.

    Unknown destinations and unknown requirement names are dropped and
    recorded in `unresolved`. An edge keeps whatever requirements resolved.
    """
    stage_id = record["id"]
    next_stages = record.get("next-stage", {})
    if not isinstance(next_stages, dict):
        raise BadStageDefinition(index, "'next-stage' must be a table")

    edges: list[Edge] = []
    for destination, requirements in next_stages.items():
        if not isinstance(requirements, list):
            raise BadStageDefinition(
                index, f"requirements for next stage '{destination}' must be a list"
            )

        target = by_id.get(destination)
        if target is None:
            unresolved.append(UnresolvedReference(stage_id, "next-stage", destination))
            continue

        required: set[int] = set()
        for name in requirements:
            if name == NO_SKILL:
                continue
            ordinal = registry.lookup(name) if isinstance(name, str) else None
            if ordinal is None:
                unresolved.append(
                    UnresolvedReference(stage_id, "required-skill", str(name))
                )
            else:
                required.add(ordinal)

        edges.append(Edge(index, target, frozenset(required)))

    return tuple(edges)
