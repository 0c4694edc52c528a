"""Path exploration over a LevelGraph.

Starting from an entry stage, every route a player can take is followed
until it finishes the game, gets stuck or walks back into a stage it has
already been through. Exploration is a depth-first search driven by an
explicit stack, so deep level graphs never hit the recursion limit.

Each branch owns its Path. When a stage offers several enabled exits, the
first exit extends the current Path in place and every other exit gets a
full clone, so sibling branches never share mutable state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from lpath.graph import Edge, LevelGraph, Stage


class Classification(Enum):
    """Terminal outcome of one exploration branch."""

    UNCLASSIFIED = auto()
    FINISHED = auto()  # reached an end stage
    DEAD_END = auto()  # no enabled exit left
    LOOPED = auto()  # walked back into a stage already in the track

    @property
    def label(self) -> str:
        """Short tag used in reports."""
        return {
            Classification.UNCLASSIFIED: "unclassified",
            Classification.FINISHED: "finished",
            Classification.DEAD_END: "deadend",
            Classification.LOOPED: "looped",
        }[self]


@dataclass
class Path:
    """Exploration state of a single branch.

    Attributes:
        track: Stage ordinals in the order they were entered, entry first.
        unlocked_skills: Skill ordinals collected so far. Only ever grows.
        visited: Stages of the track that have already been expanded.
        classification: Outcome, set once the branch stops.
    """

    track: list[int]
    unlocked_skills: set[int] = field(default_factory=set)
    visited: set[int] = field(default_factory=set)
    classification: Classification = Classification.UNCLASSIFIED

    @property
    def current(self) -> int:
        """The stage this branch is standing on."""
        return self.track[-1]

    @property
    def is_terminal(self) -> bool:
        return self.classification is not Classification.UNCLASSIFIED

    def branch(self, destination: int) -> Path:
        """Clone this path and step the clone into `destination`."""
        return Path(
            track=[*self.track, destination],
            unlocked_skills=set(self.unlocked_skills),
            visited=set(self.visited),
            classification=self.classification,
        )


@dataclass
class ExplorationResult:
    """All terminal paths found from one entry stage."""

    entry: int
    entry_id: str
    paths: list[Path] = field(default_factory=list)

    def with_classification(self, classification: Classification) -> list[Path]:
        return [p for p in self.paths if p.classification is classification]

    @property
    def finished(self) -> list[Path]:
        return self.with_classification(Classification.FINISHED)

    @property
    def dead_ends(self) -> list[Path]:
        return self.with_classification(Classification.DEAD_END)

    @property
    def loops(self) -> list[Path]:
        return self.with_classification(Classification.LOOPED)

    @property
    def has_issues(self) -> bool:
        """True if any branch got stuck or looped."""
        return bool(self.dead_ends or self.loops)


def enabled_edges(stage: Stage, unlocked_skills: set[int]) -> list[Edge]:
    """Get the exits of a stage whose requirements are all unlocked.

    Edges keep the order they were declared in, which makes exploration
    deterministic for an unchanged graph.
    """
    return [edge for edge in stage.edges if edge.is_enabled(unlocked_skills)]


def explore(graph: LevelGraph, entry: int) -> list[Path]:
    """Enumerate every terminal path from an entry stage.

    Args:
        graph: The level graph. Only read, never modified.
        entry: Ordinal of the entry stage.

    Returns:
        Terminal paths (Finished, DeadEnd or Looped) in the order they were
        reached.
    """
    results: list[Path] = []
    stack: list[Path] = [Path(track=[entry])]

    while stack:
        path = stack.pop()
        current = path.current

        if current in path.visited:
            path.classification = Classification.LOOPED
            results.append(path)
            continue
        path.visited.add(current)

        stage = graph.stage(current)
        if stage.end_game:
            path.classification = Classification.FINISHED
            results.append(path)
            continue

        path.unlocked_skills |= stage.unlockable_skills

        exits = enabled_edges(stage, path.unlocked_skills)
        if not exits:
            path.classification = Classification.DEAD_END
            results.append(path)
            continue

        # Clones must be taken before the first exit extends the track
        siblings = [path.branch(edge.target) for edge in exits[1:]]
        path.track.append(exits[0].target)
        stack.append(path)
        stack.extend(siblings)

    return results


def explore_all(graph: LevelGraph) -> list[ExplorationResult]:
    """Explore independently from every stage flagged begin = true.

    Returns:
        One ExplorationResult per begin stage, in ordinal order. Empty if the
        graph has no begin stage.
    """
    return [
        ExplorationResult(
            entry=stage.ordinal, entry_id=stage.id, paths=explore(graph, stage.ordinal)
        )
        for stage in graph.begin_stages()
    ]
