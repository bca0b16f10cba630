# tests/test_validation.py
from datetime import datetime

from conftest import workout_payload

from fitgam.validation import validate_challenge, validate_workout

NOW = datetime(2025, 6, 30, 12, 0, 0)


def test_date_with_trailing_text_is_rejected():
    clean, errors = validate_workout(workout_payload(date="2025-06-30garbage"))
    assert "date" in errors
    assert "date" not in clean


def test_iso_datetime_date_is_accepted():
    clean, errors = validate_workout(workout_payload(date="2025-06-30T08:15:00"))
    assert errors == {}
    assert clean["date"] == "2025-06-30T08:15:00"


def test_fractional_minutes_are_rejected():
    _, errors = validate_workout(workout_payload(duration=30.9))
    assert "duration" in errors


def test_whole_numbers_in_other_shapes_are_accepted():
    clean, errors = validate_workout(workout_payload(duration="30", calories_burned=250.0))
    assert errors == {}
    assert clean["duration"] == 30
    assert clean["calories_burned"] == 250
    assert isinstance(clean["duration"], int)
    assert isinstance(clean["calories_burned"], int)


def test_booleans_are_not_numbers():
    _, errors = validate_workout(workout_payload(intensity_level=True))
    assert "intensity_level" in errors


def test_non_finite_values_are_rejected():
    _, errors = validate_workout(workout_payload(distance="nan"))
    assert "distance" in errors


def test_partial_update_checks_only_sent_fields():
    clean, errors = validate_workout({"duration": "45.5"}, partial=True)
    assert set(errors) == {"duration"}
    assert clean == {}


def test_challenge_start_date_must_be_a_full_date():
    data = {
        "title": "June Miles",
        "type": "distance",
        "target": 50,
        "bonus_points": 200,
        "duration": 30,
        "start_date": "2025-06-01xyz",
    }
    _, errors = validate_challenge(data, NOW)
    assert "start_date" in errors

    data["start_date"] = "2025-06-01"
    clean, errors = validate_challenge(data, NOW)
    assert errors == {}
    assert clean["start_date"] == "2025-06-01"
