"""SQLAlchemy ORM models for logged workouts."""
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Index, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from liftlog.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Workout(Base):
    """A logged training session owned by a single user."""

    __tablename__ = "workouts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # Client-generated UUID
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False, default="Workout")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")  # draft, completed

    performed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Written by the completion endpoint
    total_volume_lb: Mapped[float | None] = mapped_column(Float, nullable=True)
    pr_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    exercises: Mapped[list["WorkoutExercise"]] = relationship(
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="WorkoutExercise.sort_index",
    )


class WorkoutExercise(Base):
    """An exercise performed within a workout, in display order."""

    __tablename__ = "workout_exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    workout_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exercise_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)  # Catalog identifier
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    sort_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    workout: Mapped[Workout] = relationship(back_populates="exercises")
    sets: Mapped[list["WorkoutSet"]] = relationship(
        back_populates="workout_exercise",
        cascade="all, delete-orphan",
        order_by="WorkoutSet.set_index",
    )


class WorkoutSet(Base):
    """A single set of an exercise."""

    __tablename__ = "workout_sets"
    __table_args__ = (
        Index("ix_workout_sets_exercise_completed", "workout_exercise_id", "completed"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # Client-generated UUID
    workout_exercise_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("workout_exercises.id", ondelete="CASCADE"), nullable=False
    )
    workout_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    exercise_id: Mapped[str] = mapped_column(String(100), nullable=False)
    exercise_name: Mapped[str] = mapped_column(String(200), nullable=False)
    set_index: Mapped[int] = mapped_column(Integer, nullable=False)

    reps: Mapped[float | None] = mapped_column(Float, nullable=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)  # lbs
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    workout_exercise: Mapped[WorkoutExercise] = relationship(back_populates="sets")


class WorkoutPR(Base):
    """A personal record achieved in a workout."""

    __tablename__ = "workout_prs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    workout_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exercise_id: Mapped[str] = mapped_column(String(100), nullable=False)
    exercise_name: Mapped[str] = mapped_column(String(200), nullable=False)

    pr_type: Mapped[str] = mapped_column(String(20), nullable=False)  # e1rm, volume
    value: Mapped[float] = mapped_column(Float, nullable=False)
    previous_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    context: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
