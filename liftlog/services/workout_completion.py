"""Workout completion: total volume and personal-record detection."""
from __future__ import annotations

import logging
from typing import Iterable

from liftlog.services.workout_analytics import (
    CompletedSetRecord,
    calculate_e1rm,
    calculate_set_volume,
    compute_best_e1rm_set,
    compute_exercise_session_volumes,
    compute_workout_volume,
    is_completed_set,
    is_new_best,
)
from liftlog.services.workout_store import PersonalRecord, WorkoutStore


logger = logging.getLogger(__name__)


def _previous_bests(history: Iterable[CompletedSetRecord]) -> tuple[dict[str, float], dict[str, float]]:
    """Best e1RM and best single-session volume per exercise from prior workouts."""
    best_e1rm: dict[str, float] = {}
    session_volumes: dict[tuple[str, str], float] = {}

    for record in history:
        if not is_completed_set(record):
            continue
        e1rm = calculate_e1rm(record.weight, record.reps)
        if e1rm > best_e1rm.get(record.exercise_id, float("-inf")):
            best_e1rm[record.exercise_id] = e1rm

        key = (record.exercise_id, record.workout_id)
        session_volumes[key] = session_volumes.get(key, 0) + calculate_set_volume(record.reps, record.weight)

    best_volume: dict[str, float] = {}
    for (exercise_id, _), volume in session_volumes.items():
        if volume > best_volume.get(exercise_id, 0):
            best_volume[exercise_id] = volume

    return best_e1rm, best_volume


def detect_personal_records(
    current: list[CompletedSetRecord],
    history: list[CompletedSetRecord],
) -> list[PersonalRecord]:
    """
    Compare a workout's sets against the same exercises in earlier workouts.

    Two record types are checked per exercise:
        - ``e1rm``: best estimated 1RM set beats the best previous set
        - ``volume``: the exercise's session volume beats the best previous session

    An exercise with no history always sets a record for each type it has a
    value for.

    Args:
        current: Sets of the workout being completed
        history: Sets of the same exercises from the user's other workouts

    Returns:
        Records in exercise order, e1rm before volume
    """
    previous_e1rm, previous_volume = _previous_bests(history)
    current_volumes = compute_exercise_session_volumes(current)

    grouped: dict[str, list[CompletedSetRecord]] = {}
    for record in current:
        grouped.setdefault(record.exercise_id, []).append(record)

    records: list[PersonalRecord] = []
    for exercise_id, sets in grouped.items():
        exercise_name = sets[0].exercise_name or "Exercise"

        best_set = compute_best_e1rm_set(sets)
        if best_set is not None:
            previous = previous_e1rm.get(exercise_id)
            if is_new_best(best_set.value, previous):
                records.append(
                    PersonalRecord(
                        exercise_id=exercise_id,
                        exercise_name=exercise_name,
                        pr_type="e1rm",
                        value=best_set.value,
                        previous_value=previous,
                        context={
                            "weight": best_set.set.weight,
                            "reps": best_set.set.reps,
                            "setIndex": best_set.set.set_index,
                        },
                    )
                )

        volume = current_volumes.get(exercise_id, 0)
        previous = previous_volume.get(exercise_id)
        if volume > 0 and is_new_best(volume, previous):
            records.append(
                PersonalRecord(
                    exercise_id=exercise_id,
                    exercise_name=exercise_name,
                    pr_type="volume",
                    value=volume,
                    previous_value=previous,
                    context={"exercise_session_volume_lb": volume},
                )
            )

    return records


def complete_workout(store: WorkoutStore, workout_id: str, user_id: str) -> tuple[float, int]:
    """Compute totals and records for a workout, persist them, and return ``(volume, pr_count)``."""

    current = store.completed_sets(workout_id)
    if not current:
        store.save_completion(user_id, workout_id, 0, [])
        return 0, 0

    exercise_ids = list(dict.fromkeys(record.exercise_id for record in current))
    history = store.history_sets(user_id, exercise_ids, exclude_workout_id=workout_id)

    total_volume = compute_workout_volume(current)
    records = detect_personal_records(current, history)
    store.save_completion(user_id, workout_id, total_volume, records)

    logger.info(
        "Completed workout %s | volume=%.1f prs=%d history_sets=%d",
        workout_id,
        total_volume,
        len(records),
        len(history),
    )
    return total_volume, len(records)
