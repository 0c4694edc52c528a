"""Level graph validation for lpath.

This module lints a built LevelGraph for design problems that construction
accepts, distinguishing between errors (blocking) and warnings
(informational).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lpath.graph import LevelGraph


@dataclass
class ValidationResult:
    """Result of graph validation.

    Attributes:
        is_valid: True if the graph passes all required checks (no errors).
        errors: List of blocking issues that make the graph unusable.
        warnings: List of informational issues that don't block analysis.
    """

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def validate_graph(graph: LevelGraph, strict: bool = False) -> ValidationResult:
    """Validate a level graph.

    Checks:
    - Begin stages (none = error, several = warning)
    - Unresolved names dropped during the build (warnings, errors if strict)
    - Stages unreachable from any begin stage (warning)
    - Stages that cannot reach any end stage (warning)
    - Required skills that no stage unlocks (warning)

    Reachability checks follow edges regardless of skill requirements.

    Args:
        graph: The graph to validate.
        strict: Treat unresolved names as errors.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    _check_begin_stages(graph, errors, warnings)

    unresolved = [ref.describe() for ref in graph.unresolved]
    if strict:
        errors.extend(unresolved)
    else:
        warnings.extend(unresolved)

    _check_reachability(graph, warnings)
    _check_skills(graph, warnings)

    return ValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _check_begin_stages(
    graph: LevelGraph, errors: list[str], warnings: list[str]
) -> None:
    """Check the number of begin stages.

    Several begin stages are allowed (each is explored on its own) but the
    profile format describes a game with a single one.
    """
    begins = graph.begin_stages()
    if not begins:
        errors.append("No begin stage defined")
    elif len(begins) > 1:
        ids = ", ".join(s.id for s in begins)
        warnings.append(f"Multiple begin stages ({ids}), each is explored separately")


def _check_reachability(graph: LevelGraph, warnings: list[str]) -> None:
    """Check stages that no begin stage reaches, and stages that reach no end."""
    begins = [s.ordinal for s in graph.begin_stages()]
    if begins:
        reachable = graph.reachable_from(begins)
        for stage in graph.stages:
            if stage.ordinal not in reachable:
                warnings.append(f"Stage '{stage.id}' is unreachable from any begin stage")

    can_reach_end = graph.reaching(s.ordinal for s in graph.end_stages())
    for stage in graph.stages:
        if stage.ordinal not in can_reach_end:
            warnings.append(f"Stage '{stage.id}' cannot reach any end stage")


def _check_skills(graph: LevelGraph, warnings: list[str]) -> None:
    """Check that every required skill is unlocked somewhere."""
    unlockable: set[int] = set()
    for stage in graph.stages:
        unlockable |= stage.unlockable_skills

    for edge in graph.edges:
        missing = edge.required_skills - unlockable
        if missing:
            names = ", ".join(graph.skill_names(missing))
            warnings.append(
                f"Transition {graph.stage(edge.source).id} -> "
                f"{graph.stage(edge.target).id} requires skills no stage "
                f"unlocks: {names}"
            )
