"""Authenticated workout sync endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from liftlog.dependencies import ApiError, ApiErrorRoute, get_current_user_id
from liftlog.models.schemas import (
    WorkoutCommitPayload,
    WorkoutCommitResponse,
    WorkoutCompletionResponse,
    WorkoutMetaResponse,
)
from liftlog.services.workout_completion import complete_workout
from liftlog.services.workout_store import WorkoutStore, WorkoutStoreError, get_workout_store


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/workouts", tags=["workouts"], route_class=ApiErrorRoute)


def parse_ids(raw: str | None) -> list[str]:
    """Split a comma-separated id list, dropping blank entries."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


@router.get("/meta", response_model=WorkoutMetaResponse)
def get_workout_meta(
    ids: str | None = None,
    user_id: str = Depends(get_current_user_id),
    store: WorkoutStore = Depends(get_workout_store),
):
    """
    Return ``updated_at``/``completed_at`` for the caller's workouts.

    Clients compare these timestamps with their local cache to decide which
    workouts need refreshing. Ids that do not exist or belong to someone
    else are silently absent from the result.

    Args:
        ids: Comma-separated workout ids

    Returns:
        WorkoutMetaResponse: ``{"data": [{id, updated_at, completed_at}, ...]}``
    """
    requested = parse_ids(ids)
    if not requested:
        return WorkoutMetaResponse(data=[])

    try:
        rows = store.fetch_metadata(requested, user_id)
    except WorkoutStoreError as err:
        raise ApiError(500, str(err)) from err

    logger.debug("Workout meta | user=%s requested=%d found=%d", user_id, len(requested), len(rows))
    return WorkoutMetaResponse(data=rows)


@router.post("/commit", response_model=WorkoutCommitResponse)
def commit_workout(
    payload: WorkoutCommitPayload,
    user_id: str = Depends(get_current_user_id),
    store: WorkoutStore = Depends(get_workout_store),
):
    """
    Store a full workout snapshot, replacing any previously committed sets.

    Returns:
        WorkoutCommitResponse: workout id, draft/completed status and set count

    Raises:
        ApiError: 400 on an invalid body, 403 if the workout id belongs to another user,
            500 on storage errors
    """
    workout_id = str(payload.workout.workout_id)
    try:
        owner = store.get_workout_owner(workout_id)
        if owner is not None and owner != user_id:
            logger.warning("User %s tried to overwrite workout %s", user_id, workout_id)
            raise ApiError(403, "Forbidden")
        set_count = store.commit_workout(user_id, payload)
    except WorkoutStoreError as err:
        raise ApiError(500, str(err)) from err

    status = "completed" if payload.workout.completed_at else "draft"
    logger.info("Committed workout %s | status=%s sets=%d", workout_id, status, set_count)
    return WorkoutCommitResponse(workout_id=workout_id, status=status, set_count=set_count)


@router.post("/{workout_id}/complete", response_model=WorkoutCompletionResponse)
def complete(
    workout_id: str,
    user_id: str = Depends(get_current_user_id),
    store: WorkoutStore = Depends(get_workout_store),
):
    """
    Compute total volume and personal records for a finished workout.

    Raises:
        ApiError: 404 if the workout does not exist, 403 if it belongs to another user
    """
    try:
        owner = store.get_workout_owner(workout_id)
        if owner is None:
            raise ApiError(404, "Workout not found")
        if owner != user_id:
            raise ApiError(403, "Forbidden")
        total_volume, pr_count = complete_workout(store, workout_id, user_id)
    except WorkoutStoreError as err:
        raise ApiError(500, str(err)) from err

    return WorkoutCompletionResponse(total_volume_lb=total_volume, pr_count=pr_count)
