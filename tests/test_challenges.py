# tests/test_challenges.py
from datetime import datetime

import pytest

from fitgam.challenges import calculate_challenge_progress, group_challenges
from fitgam.models.social import Challenge, UserProgress
from fitgam.models.user import User
from fitgam.models.workout import Workout

NOW = datetime(2025, 6, 10, 12, 0)


def make_challenge(**kw):
    base = dict(
        id="c1",
        title="Weekly Warrior",
        description="",
        type="frequency",
        target=5,
        bonus_points=500,
        duration=7,
        start_date="2025-06-05T08:00:00",
        end_date="2025-06-12T08:00:00",
    )
    base.update(kw)
    return Challenge(**base)


def workouts_on(*dates, user_id="u1", **kw):
    out = []
    for i, d in enumerate(dates):
        fields = dict(
            id=f"w{i}",
            user_id=user_id,
            type="running",
            duration=30,
            calories_burned=200,
            intensity_level=2,
            date=d,
            created_at=d,
            distance=4.0,
        )
        fields.update(kw)
        out.append(Workout(**fields))
    return out


@pytest.fixture
def user():
    return User(id="u1", email="u1@example.com", name="User One")


def test_frequency_progress(user):
    workouts = workouts_on("2025-06-05", "2025-06-07", "2025-06-12")
    assert calculate_challenge_progress(user, make_challenge(), workouts) == pytest.approx(60.0)


def test_progress_is_capped_at_100(user):
    workouts = workouts_on(*["2025-06-08"] * 6)
    assert calculate_challenge_progress(user, make_challenge(), workouts) == 100.0


def test_workouts_outside_window_are_ignored(user):
    workouts = workouts_on("2025-06-04", "2025-06-13", "2025-06-06")
    assert calculate_challenge_progress(user, make_challenge(), workouts) == pytest.approx(20.0)


def test_other_users_workouts_are_ignored(user):
    workouts = workouts_on("2025-06-06", "2025-06-07", user_id="someone-else")
    assert calculate_challenge_progress(user, make_challenge(), workouts) == 0


@pytest.mark.parametrize(
    "ctype,target,expected",
    [
        ("duration", 120, 50.0),     # 2 x 30 min
        ("distance", 16, 50.0),      # 2 x 4 km
        ("calories", 800, 50.0),     # 2 x 200 kcal
    ],
)
def test_aggregates_per_type(user, ctype, target, expected):
    workouts = workouts_on("2025-06-06", "2025-06-07")
    challenge = make_challenge(type=ctype, target=target)
    assert calculate_challenge_progress(user, challenge, workouts) == pytest.approx(expected)


def test_missing_distance_counts_as_zero(user):
    workouts = workouts_on("2025-06-06", distance=None) + workouts_on("2025-06-07")
    challenge = make_challenge(type="distance", target=8)
    assert calculate_challenge_progress(user, challenge, workouts) == pytest.approx(50.0)


def test_completed_record_is_sticky(user):
    record = UserProgress(user_id="u1", challenge_id="c1", progress=100, completed=True)
    assert calculate_challenge_progress(user, make_challenge(), [], record) == 100.0


@pytest.mark.parametrize("target", [0, -3])
def test_non_positive_target_counts_as_complete(user, target):
    assert calculate_challenge_progress(user, make_challenge(target=target), []) == 100.0


def test_group_challenges(user):
    joined = make_challenge(id="joined", participants=["u1"])
    open_one = make_challenge(id="open")
    done = make_challenge(id="done", participants=["u1"], target=1)
    ended = make_challenge(id="ended", end_date="2025-06-01", start_date="2025-05-25")

    grouped = group_challenges(
        user,
        [joined, open_one, done, ended],
        workouts_on("2025-06-06"),
        [],
        NOW,
    )

    assert [c["id"] for c in grouped["joined"]] == ["joined"]
    assert [c["id"] for c in grouped["available"]] == ["open"]
    assert [c["id"] for c in grouped["completed"]] == ["done"]
    assert grouped["joined"][0]["progress"] == 20.0
    assert grouped["joined"][0]["has_joined"] is True
