"""Volume, estimated 1RM and personal-record calculations for strength sets."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class CompletedSetRecord:
    """A logged set flattened with the exercise and workout it belongs to."""

    reps: float | None
    weight: float | None
    completed: bool
    exercise_id: str
    exercise_name: str
    workout_id: str
    set_index: int | None = None


@dataclass(frozen=True)
class BestSetResult:
    value: float
    set: CompletedSetRecord


def is_completed_set(record: CompletedSetRecord) -> bool:
    """Return True for completed sets with positive reps and weight."""
    if not record.completed:
        return False
    if not isinstance(record.reps, (int, float)) or not isinstance(record.weight, (int, float)):
        return False
    return record.reps > 0 and record.weight > 0


def calculate_set_volume(reps: float, weight: float) -> float:
    return reps * weight


def calculate_e1rm(weight: float, reps: float) -> float:
    """
    Estimate a one-rep max with the Epley formula.

    Example:
        >>> calculate_e1rm(200, 5)
        233.33333333333334
    """
    return weight * (1 + reps / 30)


def compute_workout_volume(sets: Iterable[CompletedSetRecord]) -> float:
    """Total pounds moved across completed sets."""
    return sum(
        calculate_set_volume(record.reps, record.weight)
        for record in sets
        if is_completed_set(record)
    )


def compute_exercise_session_volumes(sets: Iterable[CompletedSetRecord]) -> dict[str, float]:
    """Completed volume per exercise id, in first-seen order."""
    volumes: dict[str, float] = {}
    for record in sets:
        if not is_completed_set(record):
            continue
        volumes[record.exercise_id] = volumes.get(record.exercise_id, 0) + calculate_set_volume(
            record.reps, record.weight
        )
    return volumes


def compute_best_e1rm_set(sets: Iterable[CompletedSetRecord]) -> BestSetResult | None:
    """Return the completed set with the highest estimated 1RM, earliest on ties."""
    best: BestSetResult | None = None
    for record in sets:
        if not is_completed_set(record):
            continue
        value = calculate_e1rm(record.weight, record.reps)
        if best is None or value > best.value:
            best = BestSetResult(value=value, set=record)
    return best


def compute_week_over_week(current_volume: float, previous_volume: float) -> tuple[float, float]:
    """Return ``(delta, percent)``; percent is 0 when there is no prior volume."""
    delta = current_volume - previous_volume
    percent = (delta / previous_volume) * 100 if previous_volume > 0 else 0.0
    return delta, percent


def is_new_best(current_value: float, previous_value: float | None) -> bool:
    if previous_value is None or math.isnan(previous_value):
        return True
    return current_value > previous_value
