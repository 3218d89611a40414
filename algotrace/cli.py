"""Command-line entry point: print a generated trace with resolved lines."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .api import build_frames, generate_trace
from .errors import InvalidInputError
from .generators import SUPPORTED_ALGORITHMS
from . import constants


def _print_table(frames) -> None:
    print(f"  {'#':>4}  {'Step type':<28} {'Lines':<16} Explanation")
    print(f"  {'─' * 4}  {'─' * 28} {'─' * 16} {'─' * 40}")
    for frame in frames:
        lines = ",".join(str(n) for n in frame.highlighted_lines) or "-"
        print(
            f"  {frame.index:>4}  {frame.step.step_type.value:<28} {lines:<16} "
            f"{frame.step.explanation}"
        )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Algorithm trace generator")
    parser.add_argument("algorithm", nargs="?", help="Algorithm id to trace")
    parser.add_argument(
        "--input",
        "-i",
        default="{}",
        help='Generator arguments as a JSON object (e.g. \'{"coins": [1, 3, 4], "amount": 6}\')',
    )
    parser.add_argument(
        "--language",
        "-l",
        default=constants.DEFAULT_LANGUAGE,
        choices=constants.SUPPORTED_LANGUAGES,
        help=f"Display language for line resolution (default: {constants.DEFAULT_LANGUAGE})",
    )
    parser.add_argument("--json", action="store_true", help="Print frames as JSON")
    parser.add_argument("--list", action="store_true", help="List supported algorithms")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list or not args.algorithm:
        print("═══ Algorithms ═══")
        for algorithm_id in SUPPORTED_ALGORITHMS:
            print(f"  {algorithm_id}")
        return 0

    try:
        inputs = json.loads(args.input)
        if not isinstance(inputs, dict):
            raise ValueError("--input must be a JSON object")
        steps = generate_trace(args.algorithm, **inputs)
    except (InvalidInputError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    frames = build_frames(steps, args.algorithm, args.language)
    if args.json:
        print(json.dumps([f.to_dict() for f in frames], indent=2, ensure_ascii=False))
        return 0

    print(f"═══ {args.algorithm} ({len(steps)} steps, {args.language}) ═══")
    _print_table(frames)
    print()
    print("═══ Result ═══")
    for name, value in steps[-1].variables.items():
        print(f"  {name}: {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
