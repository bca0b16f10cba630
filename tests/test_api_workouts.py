# tests/test_api_workouts.py
from conftest import days_ago_str, register, today_str, workout_payload

from fitgam.store import LocalStore


def test_log_workout_scores_and_awards(client):
    _, headers = register(client)
    resp = client.post(
        "/api/workouts",
        json=workout_payload(type="running", duration=30, intensity_level=3,
                             calories_burned=300, distance=5),
        headers=headers,
    )
    assert resp.status_code == 201
    data = resp.get_json()

    assert data["points_earned"] == 140
    assert data["workout"]["points_earned"] == 140
    assert data["user"]["points"] == 140
    assert data["user"]["total_workouts"] == 1
    assert data["user"]["workout_streak"] == 1
    assert "first_running" in [b["id"] for b in data["user"]["badges"]]
    assert [n["type"] for n in data["notifications"]] == ["badge_earned"]


def test_invalid_workout_is_rejected(client):
    _, headers = register(client)
    resp = client.post(
        "/api/workouts",
        json=workout_payload(duration=0, intensity_level=9, type="skydiving"),
        headers=headers,
    )
    assert resp.status_code == 400
    assert {"duration", "intensity_level", "type"} <= set(resp.get_json()["errors"])


def test_list_and_recent_are_newest_first(client):
    _, headers = register(client)
    for n in (3, 1, 2):
        client.post("/api/workouts", json=workout_payload(date=days_ago_str(n)), headers=headers)

    resp = client.get("/api/workouts", headers=headers)
    dates = [w["date"] for w in resp.get_json()["workouts"]]
    assert dates == [days_ago_str(1), days_ago_str(2), days_ago_str(3)]

    resp = client.get("/api/workouts/recent?limit=2", headers=headers)
    assert len(resp.get_json()["workouts"]) == 2


def test_same_day_workouts_keep_streak(client):
    _, headers = register(client)
    client.post("/api/workouts", json=workout_payload(), headers=headers)
    resp = client.post("/api/workouts", json=workout_payload(), headers=headers)
    assert resp.get_json()["user"]["workout_streak"] == 1
    assert resp.get_json()["user"]["total_workouts"] == 2


def test_update_workout_is_narrow(client):
    _, headers = register(client)
    created = client.post("/api/workouts", json=workout_payload(), headers=headers).get_json()
    workout_id = created["workout"]["id"]

    resp = client.put(f"/api/workouts/{workout_id}", json={"duration": 45}, headers=headers)
    assert resp.status_code == 200
    workout = resp.get_json()["workout"]
    assert workout["duration"] == 45
    assert workout["points_earned"] == created["workout"]["points_earned"]
    assert workout["date"] == today_str()


def test_delete_workout(client):
    _, headers = register(client)
    created = client.post("/api/workouts", json=workout_payload(), headers=headers).get_json()
    workout_id = created["workout"]["id"]

    resp = client.delete(f"/api/workouts/{workout_id}", headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["deleted"] is True

    resp = client.delete(f"/api/workouts/{workout_id}", headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["deleted"] is False

    assert client.get("/api/workouts", headers=headers).get_json()["workouts"] == []


def test_cannot_touch_someone_elses_workout(client):
    _, alice = register(client)
    _, bob = register(client, email="bob@example.com")
    created = client.post("/api/workouts", json=workout_payload(), headers=alice).get_json()
    workout_id = created["workout"]["id"]

    assert client.put(f"/api/workouts/{workout_id}", json={"duration": 5}, headers=bob).status_code == 404
    assert client.delete(f"/api/workouts/{workout_id}", headers=bob).get_json()["deleted"] is False


def test_dashboard_overview(client):
    _, headers = register(client)
    client.post("/api/workouts", json=workout_payload(), headers=headers)

    resp = client.get("/api/dashboard/overview", headers=headers)
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["last7days"]["total_workouts"] == 1
    assert data["last7days"]["total_points"] == 50
    assert data["level"]["points_to_next_level"] == 950
    assert len(data["recent_workouts"]) == 1
    assert data["unread_notifications"] == 1


def test_malformed_numbers_and_dates_are_rejected(client):
    _, headers = register(client)
    resp = client.post(
        "/api/workouts",
        json=workout_payload(duration=30.9, intensity_level=True, date="2025-06-30garbage"),
        headers=headers,
    )
    assert resp.status_code == 400
    assert {"duration", "intensity_level", "date"} <= set(resp.get_json()["errors"])
    assert client.get("/api/workouts", headers=headers).get_json()["workouts"] == []


def test_failed_workout_write_leaves_stats_alone(client, monkeypatch):
    _, headers = register(client)
    monkeypatch.setattr(LocalStore, "add_workout", lambda self, workout: False)

    resp = client.post("/api/workouts", json=workout_payload(), headers=headers)
    assert resp.status_code == 500

    user = client.get("/api/profile", headers=headers).get_json()["user"]
    assert user["points"] == 0
    assert user["total_workouts"] == 0
    assert user["workout_streak"] == 0


def test_failed_user_write_drops_the_workout(client, monkeypatch):
    _, headers = register(client)
    monkeypatch.setattr(LocalStore, "update_user", lambda self, user: False)

    resp = client.post("/api/workouts", json=workout_payload(), headers=headers)
    assert resp.status_code == 500

    monkeypatch.undo()
    assert client.get("/api/workouts", headers=headers).get_json()["workouts"] == []
    assert client.get("/api/profile", headers=headers).get_json()["user"]["points"] == 0
