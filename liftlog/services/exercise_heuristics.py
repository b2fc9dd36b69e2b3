"""Name-based heuristics for classifying exercises."""

from __future__ import annotations


WARMUP_MARKERS: tuple[str, ...] = (
    "warm up",
    "warmup",
    "warm-up",
    "wu",
    "activation",
    "primer",
    "ramp",
    "ramping",
    "prep",
)


def is_warmup(name: str) -> bool:
    """
    Return True when an exercise name looks like a warm-up set.

    Matching is a case-insensitive substring test against ``WARMUP_MARKERS``,
    so short markers also hit inside unrelated words ("wu" in "Wushu Kick").

    Example:
        >>> is_warmup("Warm-Up Band Walk")
        True
        >>> is_warmup("Bench Press")
        False
    """
    normalized = name.lower()
    return any(marker in normalized for marker in WARMUP_MARKERS)
