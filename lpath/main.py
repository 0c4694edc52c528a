"""lpath CLI entry point."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from lpath.config import TOMLDecodeError, load_config
from lpath.errors import ProfileError
from lpath.explorer import explore_all
from lpath.graph import LevelGraph
from lpath.report import (
    OutcomeStats,
    export_json,
    export_report,
    format_transition_matrix,
    report_outcomes,
)
from lpath.validator import validate_graph

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_ISSUES = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="lpath - Enumerate the outcomes of a game's level transitions",
    )
    parser.add_argument(
        "profile",
        type=Path,
        help="Path to the profile TOML file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output (validation warnings, unlocked skills per path)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat unknown skill or stage names as errors",
    )
    parser.add_argument(
        "--show-graph",
        action="store_true",
        help="Print the stage list and transition matrix",
    )
    parser.add_argument(
        "--json",
        type=Path,
        default=None,
        help="Write results as JSON to this file",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Write the text report to this file",
    )
    parser.add_argument(
        "--fail-on-issues",
        action="store_true",
        help=f"Exit with status {EXIT_ISSUES} if any dead end or loop is found",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the lpath command."""
    args = build_parser().parse_args(argv)

    # Load profile and build the graph
    try:
        profile = load_config(args.profile)
        graph = LevelGraph.from_config(profile)
    except FileNotFoundError:
        print(f"Error: Profile not found: {args.profile}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as e:
        print(f"Error: Cannot read profile {args.profile}: {e}", file=sys.stderr)
        return EXIT_ERROR
    except (TOMLDecodeError, UnicodeDecodeError) as e:
        print(f"Error: Invalid TOML in {args.profile}: {e}", file=sys.stderr)
        return EXIT_ERROR
    except ProfileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.verbose:
        print(f"Loaded profile from {args.profile}")
        print(f"  Stages: {len(graph)}")
        print(f"  Skills: {len(graph.skills)}")
        print(f"  Transitions: {len(graph.edges)}")

    validation = validate_graph(graph, strict=args.strict)
    if validation.warnings:
        if args.verbose:
            print("Validation warnings:", file=sys.stderr)
            for warning in validation.warnings:
                print(f"  - {warning}", file=sys.stderr)
        else:
            print(
                f"{len(validation.warnings)} validation warning(s), use -v to list",
                file=sys.stderr,
            )
    if not validation.is_valid:
        print("Error: Validation failed:", file=sys.stderr)
        for error in validation.errors:
            print(f"  - {error}", file=sys.stderr)
        return EXIT_ERROR

    if args.show_graph:
        print(format_transition_matrix(graph))
        print()

    results = explore_all(graph)
    print(report_outcomes(graph, results, verbose=args.verbose))

    try:
        if args.json is not None:
            export_json(graph, results, args.json)
            print(f"Written: {args.json}")

        if args.report is not None:
            export_report(graph, results, args.report)
            print(f"Written: {args.report}")
    except OSError as e:
        print(f"Error: Cannot write output: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.fail_on_issues and OutcomeStats.from_results(results).has_issues:
        return EXIT_ISSUES
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
