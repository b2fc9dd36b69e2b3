"""Integration tests for committing workouts."""
from __future__ import annotations

import uuid

import pytest
from fastapi.testclient import TestClient

from liftlog.models.database_models import Workout, WorkoutExercise, WorkoutSet


def build_payload(workout_id: str | None = None, completed: bool = True, **overrides) -> dict:
    workout_id = workout_id or str(uuid.uuid4())
    payload = {
        "workout": {
            "workout_id": workout_id,
            "started_at": "2026-03-01T09:00:00Z",
            "completed_at": "2026-03-01T10:05:00Z" if completed else None,
            "routine_id": "upper-a",
            "routine_name": "Upper A",
            "updated_at_client": 1772359500000,
            "schema_version": 2,
        },
        "sets": [
            {
                "set_id": str(uuid.uuid4()),
                "exercise_id": "bench-press",
                "exercise_name": "Bench Press",
                "set_index": 0,
                "reps": 5,
                "weight": 185,
                "completed": True,
            },
            {
                "set_id": str(uuid.uuid4()),
                "exercise_id": "bench-press",
                "exercise_name": "Bench Press",
                "set_index": 1,
                "reps": 5,
                "weight": 185,
                "completed": True,
            },
            {
                "set_id": str(uuid.uuid4()),
                "exercise_id": "barbell-row",
                "exercise_name": "Barbell Row",
                "set_index": 0,
                "reps": None,
                "weight": None,
                "completed": False,
            },
        ],
    }
    payload.update(overrides)
    return payload


def test_commit_requires_auth(db_client: TestClient):
    response = db_client.post("/api/workouts/commit", json=build_payload())
    assert response.status_code == 401
    assert response.json() == {"error": "Missing auth token"}


def test_commit_auth_checked_before_payload(db_client: TestClient):
    response = db_client.post(
        "/api/workouts/commit",
        json={"nonsense": True},
        headers={"Authorization": "Bearer expired"},
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


def test_commit_stores_workout_exercises_and_sets(db_client: TestClient, db_session, alice_headers):
    payload = build_payload()
    workout_id = payload["workout"]["workout_id"]

    response = db_client.post("/api/workouts/commit", json=payload, headers=alice_headers)

    assert response.status_code == 200
    assert response.json() == {"workout_id": workout_id, "status": "completed", "set_count": 3}

    workout = db_session.get(Workout, workout_id)
    assert workout.user_id == "user-alice"
    assert workout.name == "Upper A"
    assert workout.status == "completed"
    assert workout.performed_at == workout.completed_at

    exercises = (
        db_session.query(WorkoutExercise)
        .filter(WorkoutExercise.workout_id == workout_id)
        .order_by(WorkoutExercise.sort_index)
        .all()
    )
    assert [(ex.exercise_id, ex.sort_index) for ex in exercises] == [("bench-press", 0), ("barbell-row", 1)]
    assert db_session.query(WorkoutSet).filter(WorkoutSet.workout_id == workout_id).count() == 3


def test_recommit_replaces_previous_sets(db_client: TestClient, db_session, alice_headers):
    payload = build_payload(completed=False)
    workout_id = payload["workout"]["workout_id"]
    first = db_client.post("/api/workouts/commit", json=payload, headers=alice_headers)
    assert first.json()["status"] == "draft"

    payload = build_payload(workout_id=workout_id)
    payload["sets"] = payload["sets"][:1]
    second = db_client.post("/api/workouts/commit", json=payload, headers=alice_headers)

    assert second.status_code == 200
    assert second.json()["set_count"] == 1
    db_session.expire_all()
    assert db_session.query(WorkoutSet).filter(WorkoutSet.workout_id == workout_id).count() == 1
    assert db_session.query(WorkoutExercise).filter(WorkoutExercise.workout_id == workout_id).count() == 1
    assert db_session.get(Workout, workout_id).status == "completed"


def test_recommit_with_same_set_ids(db_client: TestClient, db_session, alice_headers):
    payload = build_payload()
    assert db_client.post("/api/workouts/commit", json=payload, headers=alice_headers).status_code == 200

    payload["sets"][0]["reps"] = 6
    response = db_client.post("/api/workouts/commit", json=payload, headers=alice_headers)

    assert response.status_code == 200
    db_session.expire_all()
    stored = db_session.get(WorkoutSet, payload["sets"][0]["set_id"])
    assert stored.reps == 6


def test_missing_routine_name_defaults(db_client: TestClient, db_session, alice_headers):
    payload = build_payload()
    payload["workout"]["routine_name"] = None
    db_client.post("/api/workouts/commit", json=payload, headers=alice_headers)
    assert db_session.get(Workout, payload["workout"]["workout_id"]).name == "Workout"


def test_cannot_overwrite_another_users_workout(db_client: TestClient, db_session, alice_headers, bob_headers):
    payload = build_payload()
    db_client.post("/api/workouts/commit", json=payload, headers=bob_headers)

    response = db_client.post("/api/workouts/commit", json=payload, headers=alice_headers)

    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden"}
    assert db_session.get(Workout, payload["workout"]["workout_id"]).user_id == "user-bob"


class TestPayloadValidation:
    def test_completed_before_started(self, db_client: TestClient, alice_headers):
        payload = build_payload()
        payload["workout"]["completed_at"] = "2026-03-01T08:00:00Z"
        response = db_client.post("/api/workouts/commit", json=payload, headers=alice_headers)
        assert response.status_code == 400
        error = response.json()["error"]
        assert error.startswith("workout")
        assert "completed_at must be after started_at" in error

    def test_completed_set_needs_reps_and_weight(self, db_client: TestClient, alice_headers):
        payload = build_payload()
        payload["sets"][0]["weight"] = None
        response = db_client.post("/api/workouts/commit", json=payload, headers=alice_headers)
        assert response.status_code == 400
        error = response.json()["error"]
        assert error.startswith("sets.0")
        assert "Completed sets must include reps and weight" in error

    @pytest.mark.parametrize(
        "field, value",
        [("set_id", "not-a-uuid"), ("exercise_id", ""), ("set_index", -1), ("reps", -3)],
    )
    def test_invalid_set_fields(self, db_client: TestClient, alice_headers, field, value):
        payload = build_payload()
        payload["sets"][0][field] = value
        response = db_client.post("/api/workouts/commit", json=payload, headers=alice_headers)
        assert response.status_code == 400
        assert response.json()["error"].startswith(f"sets.0.{field}")

    def test_at_least_one_set(self, db_client: TestClient, alice_headers):
        payload = build_payload(sets=[])
        response = db_client.post("/api/workouts/commit", json=payload, headers=alice_headers)
        assert response.status_code == 400
        assert response.json()["error"].startswith("sets")

    def test_malformed_json(self, db_client: TestClient, alice_headers):
        response = db_client.post(
            "/api/workouts/commit",
            content=b"{not json",
            headers={**alice_headers, "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert set(response.json()) == {"error"}

    def test_auth_checked_before_body(self, db_client: TestClient):
        payload = build_payload(sets=[])
        response = db_client.post("/api/workouts/commit", json=payload)
        assert response.status_code == 401
        assert response.json() == {"error": "Missing auth token"}

    def test_invalid_body_stores_nothing(self, db_client: TestClient, db_session, alice_headers):
        payload = build_payload()
        payload["sets"][0]["weight"] = None
        db_client.post("/api/workouts/commit", json=payload, headers=alice_headers)
        assert db_session.query(Workout).count() == 0
