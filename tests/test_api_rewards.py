# tests/test_api_rewards.py
from dataclasses import replace

from conftest import register

from fitgam import get_store
from fitgam.store import LocalStore


def give_points(app, user_id, points):
    with app.app_context():
        store = get_store()
        user = store.find_user(user_id)
        store.update_user(replace(user, points=points, level=points // 1000 + 1))


def test_overview_lists_catalog(client):
    _, headers = register(client)
    resp = client.get("/api/rewards/overview", headers=headers)
    assert resp.status_code == 200
    data = resp.get_json()
    assert len(data["available"]) == 4
    assert data["redeemed"] == []
    assert data["summary"]["next_level_points"] == 1000
    assert all(r["can_afford"] is False for r in data["available"])


def test_redeem_needs_enough_points(client):
    _, headers = register(client)
    resp = client.post("/api/rewards/2/redeem", headers=headers)
    assert resp.status_code == 400
    assert resp.get_json()["points_needed"] == 500


def test_redeem_spends_points_once_per_user(app, client):
    user, headers = register(client)
    give_points(app, user["id"], 1200)

    resp = client.post("/api/rewards/1/redeem", headers=headers)
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["user"]["points"] == 200
    assert data["user"]["level"] == 1
    assert data["redemption"]["points_spent"] == 1000

    again = client.post("/api/rewards/1/redeem", headers=headers)
    assert again.status_code == 409


def test_redemption_is_per_user(app, client):
    alice, alice_headers = register(client)
    bob, bob_headers = register(client, email="bob@example.com")
    give_points(app, alice["id"], 600)
    give_points(app, bob["id"], 600)

    assert client.post("/api/rewards/2/redeem", headers=alice_headers).status_code == 200

    bob_view = client.get("/api/rewards/overview", headers=bob_headers).get_json()
    assert "2" in [r["id"] for r in bob_view["available"]]
    assert client.post("/api/rewards/2/redeem", headers=bob_headers).status_code == 200


def test_unknown_reward(client):
    _, headers = register(client)
    assert client.post("/api/rewards/999/redeem", headers=headers).status_code == 404


def test_unrecorded_redemption_costs_nothing(app, client, monkeypatch):
    user, headers = register(client)
    give_points(app, user["id"], 5000)
    monkeypatch.setattr(LocalStore, "add_redemption", lambda self, redemption: False)

    for _ in range(2):
        assert client.post("/api/rewards/2/redeem", headers=headers).status_code == 500

    with app.app_context():
        store = get_store()
        assert store.find_user(user["id"]).points == 5000
        assert store.redemptions_for_user(user["id"]) == []


def test_failed_charge_removes_the_redemption(app, client, monkeypatch):
    user, headers = register(client)
    give_points(app, user["id"], 5000)
    monkeypatch.setattr(LocalStore, "update_user", lambda self, updated: False)

    assert client.post("/api/rewards/2/redeem", headers=headers).status_code == 500

    monkeypatch.undo()
    with app.app_context():
        store = get_store()
        assert store.find_user(user["id"]).points == 5000
        assert store.redemptions_for_user(user["id"]) == []

    # nothing left behind, so a retry goes through
    resp = client.post("/api/rewards/2/redeem", headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["user"]["points"] == 4500
