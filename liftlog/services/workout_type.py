"""Coarse day-type classification for workouts."""

from __future__ import annotations

from enum import Enum


class WorkoutType(str, Enum):
    UPPER = "Upper"
    LOWER = "Lower"
    REST = "Rest"


LOWER_MARKERS: tuple[str, ...] = ("lower", "leg", "glute", "ham")


def derive_workout_type(name: str | None = None) -> WorkoutType:
    """
    Classify a workout as an Upper, Lower or Rest day from its name.

    Lower-body markers win over "upper", so "Upper Lower Combo" is a Lower
    day. Full-body sessions and names with no marker at all count as Upper.
    A missing or empty name is a Rest day.
    """
    if not name:
        return WorkoutType.REST

    normalized = name.lower()
    if any(marker in normalized for marker in LOWER_MARKERS):
        return WorkoutType.LOWER
    if "upper" in normalized:
        return WorkoutType.UPPER
    if "full" in normalized:
        return WorkoutType.UPPER
    return WorkoutType.UPPER
