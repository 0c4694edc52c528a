"""lpath - static analysis of a game's level transitions."""

__version__ = "0.1.0"

from lpath.config import ProfileConfig, load_config
from lpath.errors import (
    BadFieldType,
    BadStageDefinition,
    DuplicateStageID,
    FormatError,
    InvalidSkillType,
    MissingRequiredSection,
    MissingStageID,
    NoEndStageDefined,
    NoStagesDefined,
    ProfileError,
    StructuralError,
    UnsupportedFormatVersion,
)
from lpath.explorer import (
    Classification,
    ExplorationResult,
    Path,
    explore,
    explore_all,
)
from lpath.graph import Edge, LevelGraph, Stage, UnresolvedReference
from lpath.report import (
    OutcomeStats,
    export_json,
    export_report,
    format_path,
    format_transition_matrix,
    report_outcomes,
    results_to_dict,
)
from lpath.skills import SkillRegistry
from lpath.validator import ValidationResult, validate_graph

__all__ = [
    # Config
    "ProfileConfig",
    "load_config",
    # Errors
    "BadFieldType",
    "BadStageDefinition",
    "DuplicateStageID",
    "FormatError",
    "InvalidSkillType",
    "MissingRequiredSection",
    "MissingStageID",
    "NoEndStageDefined",
    "NoStagesDefined",
    "ProfileError",
    "StructuralError",
    "UnsupportedFormatVersion",
    # Skills
    "SkillRegistry",
    # Graph
    "Edge",
    "LevelGraph",
    "Stage",
    "UnresolvedReference",
    # Explorer
    "Classification",
    "ExplorationResult",
    "Path",
    "explore",
    "explore_all",
    # Validator
    "ValidationResult",
    "validate_graph",
    # Report
    "OutcomeStats",
    "export_json",
    "export_report",
    "format_path",
    "format_transition_matrix",
    "report_outcomes",
    "results_to_dict",
]
