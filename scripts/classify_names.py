"""Print how exercise and workout names are classified.

Useful when tuning catalog names against the warm-up and day-type heuristics.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from liftlog.services.exercise_heuristics import is_warmup
from liftlog.services.workout_type import derive_workout_type


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Classify exercise and workout names",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check whether exercises are treated as warm-ups
  python scripts/classify_names.py --exercise "Band Pull-Apart Activation" --exercise "Bench Press"

  # Check workout day types
  python scripts/classify_names.py --workout "Leg Day" --workout "Full Body"
        """,
    )
    parser.add_argument("--exercise", action="append", default=[], help="Exercise name (repeatable)")
    parser.add_argument("--workout", action="append", default=[], help="Workout name (repeatable)")
    return parser.parse_args(argv)


def classify(exercises: list[str], workouts: list[str]) -> list[str]:
    lines = []
    for name in exercises:
        lines.append(f"exercise | {name!r} -> {'warm-up' if is_warmup(name) else 'working'}")
    for name in workouts:
        lines.append(f"workout  | {name!r} -> {derive_workout_type(name).value}")
    return lines


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if not args.exercise and not args.workout:
        print("Nothing to classify; pass --exercise and/or --workout.", file=sys.stderr)
        return 1
    for line in classify(args.exercise, args.workout):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
