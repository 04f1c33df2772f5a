"""
collab_atlas/cli.py — Command-line interface for Collab Atlas.

Runs the collaboration panel computation outside the dashboard, for snapshot
generation and inspection:

Usage:
    python -m collab_atlas generate --context team-42 --names Ada Grace Linus
    python -m collab_atlas insights --context team-42 --names Ada Grace Linus --threshold 0.8
    python -m collab_atlas layout   --context team-42 --names-file team.txt --strategy free
    python -m collab_atlas run      --context repo-7 --context-type repo --names-file people.txt \\
                                    --format csv --output-dir out/

JSON goes to stdout; logs go to stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from collab_atlas.config import CONTEXT_TYPES, DEFAULT_CONFIG, LAYOUT_STRATEGIES, TIME_RANGES


# ── Logging setup ─────────────────────────────────────────────────────────────

def _setup_logging(level: str = "INFO") -> None:
    """Configure root logger with timestamps on stderr."""
    numeric = getattr(logging, level.upper(), logging.INFO)
    fmt = "%(asctime)s  %(levelname)-8s  %(name)s — %(message)s"
    datefmt = "%H:%M:%S"
    logging.basicConfig(level=numeric, format=fmt, datefmt=datefmt, stream=sys.stderr)


logger = logging.getLogger("collab_atlas.cli")


def _read_names(args: argparse.Namespace) -> list[str]:
    if args.names_file:
        lines = Path(args.names_file).read_text(encoding="utf-8").splitlines()
        return [line.strip() for line in lines if line.strip() and not line.lstrip().startswith("#")]
    return list(args.names or [])


def _emit(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


# ── Subcommand: generate ──────────────────────────────────────────────────────

def cmd_generate(args: argparse.Namespace) -> int:
    """Print the raw generated collaboration module."""
    _setup_logging(args.log_level)
    from collab_atlas.graph.generator import generate_collaboration_module

    names = _read_names(args)
    module = generate_collaboration_module(args.context, names, args.context_type, args.time_range)
    if module is None:
        logger.error("No participant names supplied for '%s'.", args.context)
        return 1
    _emit(module.to_dict())
    return 0


# ── Subcommand: insights ──────────────────────────────────────────────────────

def cmd_insights(args: argparse.Namespace) -> int:
    """Print the reduced graph's insights (always exits 0; empty input gives the no-data insight)."""
    _setup_logging(args.log_level)
    from collab_atlas.graph.generator import generate_collaboration_module
    from collab_atlas.graph.reducer import reduce_collaboration_graph
    from collab_atlas.metrics.insights import collaboration_insights

    module = generate_collaboration_module(args.context, _read_names(args), args.context_type, args.time_range)
    graph = reduce_collaboration_graph(module, args.threshold, not args.keep_isolated)
    _emit([asdict(i) for i in collaboration_insights(module, graph, args.threshold)])
    return 0


# ── Subcommand: layout ────────────────────────────────────────────────────────

def cmd_layout(args: argparse.Namespace) -> int:
    """Print the laid-out graph."""
    _setup_logging(args.log_level)
    from collab_atlas.graph.generator import generate_collaboration_module
    from collab_atlas.graph.reducer import reduce_collaboration_graph
    from collab_atlas.layout.engine import layout_graph

    module = generate_collaboration_module(args.context, _read_names(args), args.context_type, args.time_range)
    graph = reduce_collaboration_graph(module, args.threshold, not args.keep_isolated)
    _emit(layout_graph(graph, args.width, args.height, args.strategy).to_dict())
    return 0


# ── Subcommand: run (full pipeline) ──────────────────────────────────────────

def cmd_run(args: argparse.Namespace) -> int:
    """Full pipeline: generate → reduce → insights + layout + bridges."""
    _setup_logging(args.log_level)
    from collab_atlas.export import write_graph_csv
    from collab_atlas.pipeline import run_collaboration_pipeline

    names = _read_names(args)
    if not names:
        logger.error("No participant names supplied for '%s'.", args.context)
        return 1

    result = run_collaboration_pipeline(
        args.context,
        names,
        context_type=args.context_type,
        time_range=args.time_range,
        threshold=args.threshold,
        remove_isolated=not args.keep_isolated,
        width=args.width,
        height=args.height,
        strategy=args.strategy,
    )

    if args.format == "csv":
        output_dir = args.output_dir or "."
        paths = write_graph_csv(result.layout, output_dir, prefix=result.context_id)
        for insight in result.insights:
            print(insight.text)
        print(f"Nodes CSV : {paths['nodes']}")
        print(f"Edges CSV : {paths['edges']}")
        return 0

    _emit(result.to_dict())
    return 0


# ── Argument parser ───────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="collab-atlas",
        description="Collab Atlas — deterministic collaboration networks for the engineering dashboard.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Raw generated graph for a team
  python -m collab_atlas generate --context team-42 --names Ada Grace Linus

  # Insights at a stricter SPOF threshold
  python -m collab_atlas insights --context team-42 --names Ada Grace Linus --threshold 0.85

  # Full pipeline as CSV tables
  python -m collab_atlas run --context repo-7 --context-type repo --names-file people.txt --format csv
        """,
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    def add_context_flags(p: argparse.ArgumentParser) -> None:
        p.add_argument("--context", required=True, metavar="ID", help="Team or repository id")
        p.add_argument(
            "--context-type",
            default="team",
            choices=CONTEXT_TYPES,
            help="Context type (default: team)",
        )
        p.add_argument(
            "--time-range",
            default=DEFAULT_CONFIG.default_time_range,
            choices=TIME_RANGES,
            help=f"Time range preset (default: {DEFAULT_CONFIG.default_time_range})",
        )
        group = p.add_mutually_exclusive_group(required=True)
        group.add_argument("--names", nargs="+", metavar="NAME", help="Participant names")
        group.add_argument("--names-file", metavar="PATH", help="File with one participant name per line")
        p.add_argument("--log-level", default=argparse.SUPPRESS, choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                       help=argparse.SUPPRESS)

    def add_threshold_flags(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--threshold",
            type=float,
            default=DEFAULT_CONFIG.default_threshold,
            help=f"Minimum SPOF score to keep an edge (default: {DEFAULT_CONFIG.default_threshold})",
        )
        p.add_argument(
            "--keep-isolated",
            action="store_true",
            help="Keep participants left without links after thresholding",
        )

    def add_layout_flags(p: argparse.ArgumentParser) -> None:
        p.add_argument("--width", type=float, default=DEFAULT_CONFIG.canvas_width, help="Canvas width in px")
        p.add_argument("--height", type=float, default=DEFAULT_CONFIG.canvas_height, help="Canvas height in px")
        p.add_argument(
            "--strategy",
            default=DEFAULT_CONFIG.default_layout,
            choices=LAYOUT_STRATEGIES,
            help=f"Layout strategy (default: {DEFAULT_CONFIG.default_layout})",
        )

    # generate
    p_generate = subparsers.add_parser("generate", help="Print the raw generated collaboration graph")
    add_context_flags(p_generate)
    p_generate.set_defaults(func=cmd_generate)

    # insights
    p_insights = subparsers.add_parser("insights", help="Print the collaboration insights")
    add_context_flags(p_insights)
    add_threshold_flags(p_insights)
    p_insights.set_defaults(func=cmd_insights)

    # layout
    p_layout = subparsers.add_parser("layout", help="Print the laid-out reduced graph")
    add_context_flags(p_layout)
    add_threshold_flags(p_layout)
    add_layout_flags(p_layout)
    p_layout.set_defaults(func=cmd_layout)

    # run
    p_run = subparsers.add_parser("run", help="Full pipeline: generate → reduce → insights + layout + bridges")
    add_context_flags(p_run)
    add_threshold_flags(p_run)
    add_layout_flags(p_run)
    p_run.add_argument("--format", default="json", choices=["json", "csv"], help="Output format (default: json)")
    p_run.add_argument("--output-dir", default=None, metavar="PATH", help="CSV output directory (default: .)")
    p_run.set_defaults(func=cmd_run)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
