"""
DECIDE CLI - Command-Line Interface for the Launch Decision Engine.

Commands:
    decide run <path>         - Evaluate an input file or directory
    decide explain <file>     - Show why each condition is (not) met
    decide summary <dir>      - Tabulate a directory of output records

The CLI never emits a partial decision. An input that fails parsing
or validation is reported and makes the exit status non-zero.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from ..codec import RecordFormatError, read_input_file
from ..conditions.evaluator import CONDITIONS
from ..domain import DecideOutput, InvalidConfigurationError, LaunchDecision
from ..engine import decide
from ..launch import aggregate_launch
from .pipeline import evaluate_path, load_output_records


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

def format_flag(value: bool) -> str:
    return "V" if value else "X"


def format_vector(vector) -> str:
    return " ".join(format_flag(v) for v in vector)


def format_explanation(output: DecideOutput) -> str:
    """Format the per-condition breakdown of one evaluation."""
    lines = []
    for result in output.conditions:
        status = "MET" if result.met else "---"
        lines.append(f"LIC {result.index:>2} [{status}] {result.name}")
        lines.append(f"    {CONDITIONS[result.index].summary}")
        lines.append(f"    {result.reason}")
        if result.witnesses:
            windows = ", ".join(str(list(w)) for w in result.witnesses)
            lines.append(f"    Witness: {windows}")

    lines.append("")
    lines.append(f"CMV: {format_vector(output.cmv)}")
    lines.append(f"FUV: {format_vector(output.fuv)}")
    lines.append(f"LAUNCH: {output.launch.value}")
    return "\n".join(lines)


# =============================================================================
# CLI COMMANDS
# =============================================================================

def cmd_run(args: argparse.Namespace) -> int:
    """Evaluate a file or every input file of a directory."""
    path = Path(args.path)
    if not path.exists():
        print(f"No such file or directory: {path}")
        return 1

    output_dir = Path(args.output) if args.output else None
    input_dir = path if path.is_dir() else path.parent
    if output_dir is not None and output_dir.resolve() == input_dir.resolve():
        print(f"Output directory must differ from the input directory: {output_dir}")
        return 1

    results = evaluate_path(path, output_dir, args.workers)

    single = not path.is_dir()
    for result in results:
        if result.succeeded:
            decision = result.output.launch.value
            print(decision if single else f"{result.name} {decision}")
        else:
            print(f"ERROR {result.name}: {result.error}")

    failures = [r for r in results if not r.succeeded]
    return 1 if failures else 0


def cmd_explain(args: argparse.Namespace) -> int:
    """Show the evaluation breakdown for one input file."""
    try:
        snapshot = read_input_file(args.file)
        output = decide(snapshot, workers=args.workers)
    except (RecordFormatError, InvalidConfigurationError, OSError) as e:
        print("ERROR: Evaluation failed")
        print(f"Reason: {e}")
        return 1

    print(f"DECIDE — {Path(args.file).name}")
    print("=" * 50)
    print(format_explanation(output))
    return 0


def cmd_summary(args: argparse.Namespace) -> int:
    """Tabulate the decisions stored in a directory of output records."""
    output_dir = Path(args.directory)
    if not output_dir.is_dir():
        print(f"Not a directory: {output_dir}")
        return 1

    records = load_output_records(output_dir)
    if not records:
        print(f"No output records found in {output_dir}")
        return 1

    print("DECIDE — Decisions")
    print("=" * 50)
    counts = {LaunchDecision.YES: 0, LaunchDecision.NO: 0}
    for name, output in records:
        decision = aggregate_launch(output.fuv)
        counts[decision] += 1
        marker = "" if decision is output.launch else "  (stored: " + output.launch.value + ")"
        print(f"{name:<30} {decision.value}{marker}")

    print()
    print(f"Total: {len(records)} | YES: {counts[LaunchDecision.YES]} | NO: {counts[LaunchDecision.NO]}")
    return 0


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="decide",
        description="DECIDE — Launch Interceptor Condition Evaluation",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    # Run command
    run_parser = subparsers.add_parser(
        "run",
        help="Evaluate an input file or a directory of input files",
    )
    run_parser.add_argument("path", help="Input JSON file or directory")
    run_parser.add_argument(
        "-o", "--output",
        help="Directory to write output records into",
    )
    run_parser.add_argument(
        "-w", "--workers",
        type=int,
        default=None,
        help="Evaluate conditions on this many threads",
    )
    run_parser.set_defaults(func=cmd_run)

    # Explain command
    explain_parser = subparsers.add_parser(
        "explain",
        help="Show the condition breakdown for an input file",
    )
    explain_parser.add_argument("file", help="Input JSON file")
    explain_parser.add_argument(
        "-w", "--workers",
        type=int,
        default=None,
        help="Evaluate conditions on this many threads",
    )
    explain_parser.set_defaults(func=cmd_explain)

    # Summary command
    summary_parser = subparsers.add_parser(
        "summary",
        help="Tabulate a directory of output records",
    )
    summary_parser.add_argument("directory", help="Directory of output records")
    summary_parser.set_defaults(func=cmd_summary)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
