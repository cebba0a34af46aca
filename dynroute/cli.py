"""Command-line interface for DynRoute."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Optional

from dynroute.errors import DynRouteError
from dynroute.logging import get_logger, set_global_log_level
from dynroute.scenario import Scenario

logger = get_logger(__name__)


def _format_table(headers: List[str], rows: List[List[Any]], min_width: int = 6) -> str:
    """Format rows as a plain ASCII table; empty string when there are no rows."""
    if not rows:
        return ""

    cells = [[str(h) for h in headers]] + [[str(v) for v in row] for row in rows]
    widths = [
        max(min_width, max(len(row[i]) for row in cells)) for i in range(len(headers))
    ]

    def format_row(row: List[str]) -> str:
        return "   " + " | ".join(f"{v:<{widths[i]}}" for i, v in enumerate(row))

    lines = [format_row(cells[0]), "   " + "-+-".join("-" * w for w in widths)]
    lines.extend(format_row(row) for row in cells[1:])
    return "\n".join(lines)


def _results_path(scenario_path: Path, override: Optional[Path]) -> Path:
    if override is not None:
        return override
    return Path.cwd() / f"{scenario_path.stem}.results.json"


def _inspect_scenario(path: Path, detail: bool = False) -> None:
    """Print a summary of the scenario's graph, queries and updates."""
    logger.info(f"Inspecting scenario from: {path}")
    try:
        scenario = Scenario.from_yaml(path.read_text())
    except FileNotFoundError:
        logger.error(f"Scenario file not found: {path}")
        print(f"❌ ERROR: Scenario file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to inspect scenario: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to inspect scenario: {type(e).__name__}: {e}")
        sys.exit(1)

    graph = scenario.router.graph
    print(f"Scenario: {path}")
    print(f"   Nodes: {len(graph)}")
    print(f"   Edges: {graph.edge_count()}")
    print(f"   Queries: {len(scenario.queries)}")
    print(f"   Updates: {len(scenario.updates)}")

    if detail:
        print("\nEdges:")
        print(
            _format_table(
                ["Source", "Target", "Weight"],
                [[e.source, e.target, e.weight] for e in graph.edges()],
            )
        )
    if scenario.queries:
        print("\nQueries:")
        print(
            _format_table(
                ["Name", "Start", "Candidates"],
                [
                    [q.name, q.start, ", ".join(map(str, q.candidates))]
                    for q in scenario.queries
                ],
            )
        )
    if scenario.updates:
        print("\nUpdates:")
        print(
            _format_table(
                ["Source", "Target", "Weight"],
                [[u.source, u.target, u.weight] for u in scenario.updates],
            )
        )


def _run_scenario(
    path: Path,
    results_override: Optional[Path],
    no_results: bool,
    stdout: bool,
) -> None:
    """Run a scenario file and export results as JSON by default.

    Args:
        path: Scenario YAML file.
        results_override: Explicit results path. Defaults to
            ``<scenario_name>.results.json`` in the current directory.
        no_results: Whether to disable results file generation.
        stdout: Whether to also print results to stdout.
    """
    logger.info(f"Loading scenario from: {path}")
    start_time = perf_counter()

    try:
        scenario = Scenario.from_yaml(path.read_text())
        logger.info("Starting scenario execution")
        scenario.run()
        logger.info("Scenario execution completed successfully")
        print("✅ Scenario execution completed")

        results_dict: Dict[str, Any] = scenario.to_dict()
        json_str = json.dumps(results_dict, indent=2, default=str, allow_nan=False)

        if not no_results:
            output = _results_path(path, results_override)
            output.parent.mkdir(parents=True, exist_ok=True)
            logger.info(f"Writing results to: {output}")
            output.write_text(json_str)
            print(f"✅ Results written to: {output}")

        if stdout:
            print(json_str)

        logger.info(
            f"Scenario run completed in {perf_counter() - start_time:.3f} s"
        )

    except FileNotFoundError:
        logger.error(f"Scenario file not found: {path}")
        print(f"❌ ERROR: Scenario file not found: {path}")
        sys.exit(1)
    except DynRouteError as e:
        logger.error(f"Routing error: {type(e).__name__}: {e}")
        print(f"❌ ERROR: {type(e).__name__}: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to run scenario: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to run scenario: {type(e).__name__}: {e}")
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``dynroute`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="dynroute",
        description="Replay best-destination route queries against a road network.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress informational logs"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{run,inspect}",
        help="Available commands",
    )

    run_parser = subparsers.add_parser("run", help="Run a scenario")
    run_parser.add_argument("scenario", type=Path, help="Path to scenario YAML")
    run_parser.add_argument(
        "--results",
        "-r",
        type=Path,
        default=None,
        help="Export results to JSON file (default: <scenario_name>.results.json)",
    )
    run_parser.add_argument(
        "--no-results",
        action="store_true",
        help="Disable results file generation",
    )
    run_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print results to stdout",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Inspect and validate a scenario"
    )
    inspect_parser.add_argument("scenario", type=Path, help="Path to scenario YAML")
    inspect_parser.add_argument(
        "--detail",
        "-d",
        action="store_true",
        help="Show the complete edge table",
    )

    effective_args = sys.argv[1:] if argv is None else argv
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "run":
        _run_scenario(
            path=args.scenario,
            results_override=args.results,
            no_results=args.no_results,
            stdout=args.stdout,
        )
    elif args.command == "inspect":
        _inspect_scenario(args.scenario, args.detail)


if __name__ == "__main__":
    main()
