"""Tests for workout day-type classification."""

import pytest

from liftlog.services.workout_type import WorkoutType, derive_workout_type


class TestRestDays:
    def test_missing_name_is_rest(self):
        assert derive_workout_type() is WorkoutType.REST
        assert derive_workout_type(None) is WorkoutType.REST

    def test_empty_name_is_rest(self):
        assert derive_workout_type("") is WorkoutType.REST


class TestMarkers:
    @pytest.mark.parametrize("name", ["Leg Day", "Lower A", "Glute Focus", "Hamstrings + Calves"])
    def test_lower_markers(self, name):
        assert derive_workout_type(name) is WorkoutType.LOWER

    def test_upper_marker(self):
        assert derive_workout_type("Upper Push") is WorkoutType.UPPER

    def test_full_body_counts_as_upper(self):
        assert derive_workout_type("Full Body") is WorkoutType.UPPER

    def test_unmatched_name_falls_back_to_upper(self):
        assert derive_workout_type("Cardio") is WorkoutType.UPPER

    def test_lower_markers_take_priority(self):
        """Lower markers are checked before "upper" regardless of position."""
        assert derive_workout_type("Upper Lower Combo") is WorkoutType.LOWER
        assert derive_workout_type("Full Body Legs") is WorkoutType.LOWER


def test_values_serialise_as_labels():
    assert derive_workout_type("leg day") == "Lower"
    assert derive_workout_type("").value == "Rest"
