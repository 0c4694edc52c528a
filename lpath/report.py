"""Output module for exploration results.

This module renders exploration results as:
- A human-readable outcome report
- JSON for consumption by other tools
- An adjacency matrix dump of the level graph

Nothing here runs during exploration; it only reads the returned results.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path as FilePath
from typing import Any

from lpath.explorer import Classification, ExplorationResult, Path
from lpath.graph import LevelGraph


@dataclass
class OutcomeStats:
    """Counts of terminal paths by classification.

    Attributes:
        entries: Number of entry stages explored
        total: Number of terminal paths
        finished: Paths that reached an end stage
        dead_ends: Paths stuck with no enabled exit
        loops: Paths that walked back into their own track
    """

    entries: int
    total: int
    finished: int
    dead_ends: int
    loops: int

    @classmethod
    def from_results(cls, results: list[ExplorationResult]) -> OutcomeStats:
        """Compute statistics over all entries' results."""
        return cls(
            entries=len(results),
            total=sum(len(r.paths) for r in results),
            finished=sum(len(r.finished) for r in results),
            dead_ends=sum(len(r.dead_ends) for r in results),
            loops=sum(len(r.loops) for r in results),
        )

    @property
    def has_issues(self) -> bool:
        return self.dead_ends > 0 or self.loops > 0


def format_path(graph: LevelGraph, entry_id: str, path: Path) -> str:
    """Render one path as a single line.

    Example:
        [finished] entry = 1-1, track = 1-1 -> 1-2
    """
    track = " -> ".join(graph.track_ids(path.track))
    return f"[{path.classification.label}] entry = {entry_id}, track = {track}"


def report_outcomes(
    graph: LevelGraph, results: list[ExplorationResult], verbose: bool = False
) -> str:
    """Generate a human-readable outcome report.

    Args:
        graph: The explored graph
        results: Exploration results, one per entry stage
        verbose: Also list the unlocked skills of every path

    Returns:
        Multi-line string report
    """
    stats = OutcomeStats.from_results(results)
    lines: list[str] = []

    lines.append("=" * 50)
    lines.append("Level Path Report")
    lines.append("=" * 50)
    lines.append(f"Stages: {len(graph)}")
    lines.append(f"Skills: {len(graph.skills)}")
    lines.append(f"Entries: {stats.entries}")
    lines.append("")

    for result in results:
        lines.append(f"Begin from {result.entry_id} ({len(result.paths)} paths)")
        for path in result.paths:
            lines.append(f"  {format_path(graph, result.entry_id, path)}")
            if verbose:
                skills = ", ".join(graph.skill_names(path.unlocked_skills)) or "-"
                lines.append(f"      skills: {skills}")
        lines.append("")

    lines.append("Summary:")
    lines.append(f"  Total paths: {stats.total}")
    lines.append(f"  Finished: {stats.finished}")
    lines.append(f"  Dead ends: {stats.dead_ends}")
    lines.append(f"  Loops: {stats.loops}")
    lines.append("")
    lines.append("Status: ISSUES FOUND" if stats.has_issues else "Status: OK")

    return "\n".join(lines)


def path_to_dict(graph: LevelGraph, path: Path) -> dict[str, Any]:
    return {
        "classification": path.classification.label,
        "track": graph.track_ids(path.track),
        "unlocked_skills": graph.skill_names(path.unlocked_skills),
    }


def results_to_dict(
    graph: LevelGraph, results: list[ExplorationResult]
) -> dict[str, Any]:
    """Convert exploration results to a JSON-serializable dictionary.

    Returns:
        Dictionary with the following structure:
        - version: profile format version
        - stages: list of {id, description, begin, end}
        - skills: skill names by ordinal
        - entries: list of {entry, paths: [{classification, track, unlocked_skills}]}
        - summary: counts by classification
    """
    stats = OutcomeStats.from_results(results)
    return {
        "version": graph.version,
        "stages": [
            {
                "id": stage.id,
                "description": stage.description,
                "begin": stage.begin_game,
                "end": stage.end_game,
            }
            for stage in graph.stages
        ],
        "skills": graph.skills.names,
        "entries": [
            {
                "entry": result.entry_id,
                "paths": [path_to_dict(graph, p) for p in result.paths],
            }
            for result in results
        ],
        "summary": {
            "total": stats.total,
            Classification.FINISHED.label: stats.finished,
            Classification.DEAD_END.label: stats.dead_ends,
            Classification.LOOPED.label: stats.loops,
        },
    }


def export_json(
    graph: LevelGraph, results: list[ExplorationResult], output_path: FilePath
) -> None:
    """Export exploration results to a JSON file.

    Args:
        graph: The explored graph
        results: Exploration results
        output_path: Path to write the JSON file
    """
    data = results_to_dict(graph, results)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_report(
    graph: LevelGraph, results: list[ExplorationResult], output_path: FilePath
) -> None:
    """Write the outcome report (with unlocked skills) to a text file."""
    report = report_outcomes(graph, results, verbose=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(report + "\n")


def format_transition_matrix(graph: LevelGraph) -> str:
    """Render the stage list and the 0/1 transition matrix.

    Row a, column b is 1 when stage a has an exit to stage b.
    """
    lines = [f"{stage.ordinal} = {stage.id}" for stage in graph.stages]
    for row in graph.transition_matrix():
        lines.append(" ".join("1" if cell else "0" for cell in row))
    return "\n".join(lines)
