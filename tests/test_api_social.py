# tests/test_api_social.py
from conftest import register, workout_payload


def test_leaderboard_ranks_everyone(client):
    _, alice = register(client)
    bob_user, bob = register(client, email="bob@example.com", name="Bob")
    client.post("/api/workouts", json=workout_payload(duration=60), headers=bob)

    resp = client.get("/api/leaderboard", headers=alice)
    assert resp.status_code == 200
    data = resp.get_json()

    assert set(data["leaderboards"]) == {"points", "workouts", "calories", "streak"}
    points_board = data["leaderboards"]["points"]
    assert points_board[0]["user_id"] == bob_user["id"]
    assert [e["rank"] for e in points_board] == list(range(1, len(points_board) + 1))
    assert data["my_ranks"]["points"] >= 2


def test_single_metric_leaderboard(client):
    _, headers = register(client)
    resp = client.get("/api/leaderboard/streak?limit=1", headers=headers)
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["metric"] == "streak"
    assert len(data["entries"]) == 1

    assert client.get("/api/leaderboard/pushups", headers=headers).status_code == 404


def test_notifications_flow(client):
    _, headers = register(client)
    client.post("/api/workouts", json=workout_payload(type="yoga"), headers=headers)

    data = client.get("/api/notifications", headers=headers).get_json()
    assert data["unread_count"] == 1
    note = data["notifications"][0]
    assert note["type"] == "badge_earned"
    assert "First Flow" in note["message"]

    resp = client.post(f"/api/notifications/{note['id']}/read", headers=headers)
    assert resp.status_code == 200
    assert client.get("/api/notifications?unread=1", headers=headers).get_json()["notifications"] == []

    assert client.post("/api/notifications/missing/read", headers=headers).status_code == 404
    assert client.post("/api/notifications/read-all", headers=headers).get_json()["updated"] == 0
