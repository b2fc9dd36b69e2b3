"""Pydantic models describing API payloads."""
from datetime import datetime, timezone
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator


NonNegativeNumber = Annotated[float, Field(ge=0, allow_inf_nan=False)]


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class WorkoutMeta(BaseModel):
    """Freshness timestamps for a stored workout."""

    id: str
    updated_at: datetime | None = None
    completed_at: datetime | None = None

    @field_validator("updated_at", "completed_at")
    @classmethod
    def attach_utc(cls, value: datetime | None) -> datetime | None:
        # SQLite hands back naive values for timezone-aware columns.
        return _as_utc(value)

    class Config:
        from_attributes = True


class WorkoutMetaResponse(BaseModel):
    """Schema for the workout metadata API response."""

    data: list[WorkoutMeta] = []


# Workout commit schemas
class WorkoutCommitWorkout(BaseModel):
    """Session-level fields of a committed workout."""

    workout_id: UUID
    started_at: datetime
    completed_at: datetime | None = None
    routine_id: str | None = None
    routine_name: str | None = None
    updated_at_client: int
    schema_version: int

    @field_validator("started_at", "completed_at")
    @classmethod
    def normalize_timezone(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)

    @model_validator(mode="after")
    def check_completion_order(self) -> "WorkoutCommitWorkout":
        if self.completed_at is not None and self.completed_at < self.started_at:
            raise ValueError("completed_at must be after started_at")
        return self


class WorkoutCommitSet(BaseModel):
    """A single logged set inside a workout commit."""

    set_id: UUID
    exercise_id: str = Field(min_length=1)
    exercise_name: str = Field(min_length=1)
    set_index: int = Field(ge=0)
    reps: NonNegativeNumber | None
    weight: NonNegativeNumber | None
    notes: str | None = None
    completed: bool
    updated_at_client: int | None = None

    @model_validator(mode="after")
    def check_completed_values(self) -> "WorkoutCommitSet":
        if self.completed and (self.reps is None or self.weight is None):
            raise ValueError("Completed sets must include reps and weight")
        return self


class WorkoutCommitPayload(BaseModel):
    """Full workout snapshot pushed by a client."""

    workout: WorkoutCommitWorkout
    sets: list[WorkoutCommitSet] = Field(min_length=1)


class WorkoutCommitResponse(BaseModel):
    """Schema for the workout commit API response."""

    workout_id: str
    status: str
    set_count: int


class WorkoutCompletionResponse(BaseModel):
    """Totals written back when a workout is completed."""

    total_volume_lb: float
    pr_count: int


# Plate calculator schemas
class PlateCount(BaseModel):
    weight: float
    label: str
    count: int


class PlateBreakdownResponse(BaseModel):
    """Schema for the plate calculator API response."""

    target_weight: float
    plates_per_side: list[PlateCount] = []
    weight_per_side: float
    achievable_weight: float
    is_exact: bool
    text: str
