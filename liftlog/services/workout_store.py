"""Workout storage access scoped to a single owner."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol, Sequence

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from liftlog.database import get_db
from liftlog.models.database_models import Workout, WorkoutExercise, WorkoutPR, WorkoutSet
from liftlog.models.schemas import WorkoutCommitPayload, WorkoutMeta
from liftlog.services.workout_analytics import CompletedSetRecord


logger = logging.getLogger(__name__)


class WorkoutStoreError(RuntimeError):
    """Raised when the storage backend fails; the message is safe to return to clients."""


@dataclass(frozen=True)
class PersonalRecord:
    """A personal record detected while completing a workout."""

    exercise_id: str
    exercise_name: str
    pr_type: str  # e1rm, volume
    value: float
    previous_value: float | None
    context: dict[str, Any] = field(default_factory=dict)


class WorkoutStore(Protocol):
    """Storage operations the workout endpoints depend on."""

    def fetch_metadata(self, ids: Sequence[str], user_id: str) -> list[WorkoutMeta]:
        """Return freshness timestamps for the given ids owned by ``user_id``."""
        ...

    def get_workout_owner(self, workout_id: str) -> str | None:
        ...

    def commit_workout(self, user_id: str, payload: WorkoutCommitPayload) -> int:
        """Upsert a workout snapshot and return the number of sets stored."""
        ...

    def completed_sets(self, workout_id: str) -> list[CompletedSetRecord]:
        ...

    def history_sets(
        self,
        user_id: str,
        exercise_ids: Sequence[str],
        exclude_workout_id: str,
    ) -> list[CompletedSetRecord]:
        """Completed sets of the given exercises from the user's other workouts."""
        ...

    def save_completion(
        self,
        user_id: str,
        workout_id: str,
        total_volume: float,
        records: Sequence[PersonalRecord],
    ) -> None:
        """Replace the workout's personal records and write back its totals."""
        ...


def _error_message(err: SQLAlchemyError) -> str:
    original = getattr(err, "orig", None)
    return str(original) if original is not None else str(err)


class SqlAlchemyWorkoutStore:
    """WorkoutStore backed by the application's SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def fetch_metadata(self, ids: Sequence[str], user_id: str) -> list[WorkoutMeta]:
        try:
            rows = (
                self._db.query(Workout.id, Workout.updated_at, Workout.completed_at)
                .filter(
                    Workout.id.in_(list(ids)),
                    Workout.user_id == user_id,
                )
                .all()
            )
        except SQLAlchemyError as err:
            logger.exception("Workout metadata query failed")
            raise WorkoutStoreError(_error_message(err)) from err

        return [WorkoutMeta.model_validate(row) for row in rows]

    def get_workout_owner(self, workout_id: str) -> str | None:
        try:
            row = self._db.query(Workout.user_id).filter(Workout.id == workout_id).first()
        except SQLAlchemyError as err:
            logger.exception("Workout lookup failed for %s", workout_id)
            raise WorkoutStoreError(_error_message(err)) from err
        return row.user_id if row else None

    def commit_workout(self, user_id: str, payload: WorkoutCommitPayload) -> int:
        snapshot = payload.workout
        workout_id = str(snapshot.workout_id)
        now = datetime.now(timezone.utc)

        try:
            workout = self._db.get(Workout, workout_id)
            if workout is None:
                workout = Workout(id=workout_id, user_id=user_id)
                self._db.add(workout)

            workout.name = snapshot.routine_name or "Workout"
            workout.started_at = snapshot.started_at
            workout.completed_at = snapshot.completed_at
            workout.performed_at = snapshot.completed_at or snapshot.started_at
            workout.status = "completed" if snapshot.completed_at else "draft"
            workout.updated_at = now
            self._db.flush()

            # Sets reference exercises, so they go first.
            self._db.query(WorkoutSet).filter(WorkoutSet.workout_id == workout_id).delete(
                synchronize_session="fetch"
            )
            self._db.query(WorkoutExercise).filter(WorkoutExercise.workout_id == workout_id).delete(
                synchronize_session="fetch"
            )
            self._db.expire(workout, ["exercises"])

            exercises: dict[str, WorkoutExercise] = {}
            for item in payload.sets:
                if item.exercise_id in exercises:
                    continue
                exercise = WorkoutExercise(
                    workout_id=workout_id,
                    exercise_id=item.exercise_id,
                    name=item.exercise_name,
                    sort_index=len(exercises),
                    updated_at=now,
                )
                self._db.add(exercise)
                exercises[item.exercise_id] = exercise
            self._db.flush()

            for item in payload.sets:
                self._db.add(
                    WorkoutSet(
                        id=str(item.set_id),
                        workout_exercise_id=exercises[item.exercise_id].id,
                        workout_id=workout_id,
                        user_id=user_id,
                        exercise_id=item.exercise_id,
                        exercise_name=item.exercise_name,
                        set_index=item.set_index,
                        reps=item.reps,
                        weight=item.weight,
                        completed=item.completed,
                        notes=item.notes,
                        updated_at=now,
                    )
                )
            self._db.flush()
        except SQLAlchemyError as err:
            logger.exception("Workout commit failed for %s", workout_id)
            self._db.rollback()
            raise WorkoutStoreError(_error_message(err)) from err

        return len(payload.sets)

    def completed_sets(self, workout_id: str) -> list[CompletedSetRecord]:
        try:
            rows = (
                self._db.query(WorkoutSet, WorkoutExercise.exercise_id, WorkoutExercise.name)
                .join(WorkoutExercise, WorkoutSet.workout_exercise_id == WorkoutExercise.id)
                .filter(
                    WorkoutExercise.workout_id == workout_id,
                    WorkoutSet.completed.is_(True),
                )
                .order_by(WorkoutExercise.sort_index, WorkoutSet.set_index)
                .all()
            )
        except SQLAlchemyError as err:
            logger.exception("Completed set query failed for %s", workout_id)
            raise WorkoutStoreError(_error_message(err)) from err

        return [
            CompletedSetRecord(
                reps=workout_set.reps,
                weight=workout_set.weight,
                completed=workout_set.completed,
                exercise_id=exercise_id,
                exercise_name=name,
                workout_id=workout_id,
                set_index=workout_set.set_index,
            )
            for workout_set, exercise_id, name in rows
        ]

    def history_sets(
        self,
        user_id: str,
        exercise_ids: Sequence[str],
        exclude_workout_id: str,
    ) -> list[CompletedSetRecord]:
        if not exercise_ids:
            return []

        try:
            rows = (
                self._db.query(WorkoutSet, WorkoutExercise.exercise_id, WorkoutExercise.name, Workout.id)
                .join(WorkoutExercise, WorkoutSet.workout_exercise_id == WorkoutExercise.id)
                .join(Workout, WorkoutExercise.workout_id == Workout.id)
                .filter(
                    WorkoutExercise.exercise_id.in_(list(exercise_ids)),
                    Workout.user_id == user_id,
                    Workout.id != exclude_workout_id,
                    WorkoutSet.completed.is_(True),
                )
                .all()
            )
        except SQLAlchemyError as err:
            logger.exception("Exercise history query failed for user %s", user_id)
            raise WorkoutStoreError(_error_message(err)) from err

        return [
            CompletedSetRecord(
                reps=workout_set.reps,
                weight=workout_set.weight,
                completed=workout_set.completed,
                exercise_id=exercise_id,
                exercise_name=name,
                workout_id=workout_id,
                set_index=workout_set.set_index,
            )
            for workout_set, exercise_id, name, workout_id in rows
        ]

    def save_completion(
        self,
        user_id: str,
        workout_id: str,
        total_volume: float,
        records: Sequence[PersonalRecord],
    ) -> None:
        try:
            self._db.query(WorkoutPR).filter(WorkoutPR.workout_id == workout_id).delete(
                synchronize_session="fetch"
            )
            for record in records:
                self._db.add(
                    WorkoutPR(
                        user_id=user_id,
                        workout_id=workout_id,
                        exercise_id=record.exercise_id,
                        exercise_name=record.exercise_name,
                        pr_type=record.pr_type,
                        value=record.value,
                        previous_value=record.previous_value,
                        context=record.context,
                    )
                )
            self._db.query(Workout).filter(Workout.id == workout_id).update(
                {"total_volume_lb": total_volume, "pr_count": len(records)},
                synchronize_session=False,
            )
            self._db.flush()
        except SQLAlchemyError as err:
            logger.exception("Saving completion totals failed for %s", workout_id)
            self._db.rollback()
            raise WorkoutStoreError(_error_message(err)) from err


def get_workout_store(db: Session = Depends(get_db)) -> WorkoutStore:
    """FastAPI dependency building a store on the request's session."""
    return SqlAlchemyWorkoutStore(db)
