# tests/test_api_auth.py
from conftest import SIGNUP, register

from fitgam import get_store


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok"}


def test_register_returns_token_and_fresh_user(client):
    user, headers = register(client)
    assert user["email"] == "ana@example.com"
    assert user["points"] == 0
    assert user["level"] == 1
    assert user["badges"] == []

    resp = client.get("/api/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["user"]["id"] == user["id"]


def test_register_validation_errors(client):
    resp = client.post("/api/auth/register", json={"email": "nope", "password": "123"})
    assert resp.status_code == 400
    errors = resp.get_json()["errors"]
    assert {"name", "email", "password", "age", "fitness_goals"} <= set(errors)


def test_duplicate_email_is_a_field_error(app, client):
    register(client)
    resp = client.post("/api/auth/register", json=dict(SIGNUP, email="ANA@example.com"))
    assert resp.status_code == 400
    assert "email" in resp.get_json()["errors"]

    with app.app_context():
        emails = [u.email for u in get_store().get_users()]
    assert emails.count("ana@example.com") == 1


def test_login_checks_password(client):
    register(client)

    bad = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "wrong!!"})
    assert bad.status_code == 401

    good = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "secret123"})
    assert good.status_code == 200
    assert good.get_json()["token"]


def test_demo_user_can_log_in(client):
    resp = client.post("/api/auth/login", json={"email": "demo@fitgam.app", "password": "demo1234"})
    assert resp.status_code == 200
    assert resp.get_json()["user"]["id"] == "demo_user"


def test_logout_clears_current_user(app, client):
    _, headers = register(client)
    with app.app_context():
        assert get_store().get_current_user() is not None

    resp = client.post("/api/auth/logout", headers=headers)
    assert resp.status_code == 200
    with app.app_context():
        assert get_store().get_current_user() is None


def test_protected_route_needs_token(client):
    resp = client.get("/api/workouts")
    assert resp.status_code == 401


def test_profile_update_ignores_stats(client):
    _, headers = register(client)
    resp = client.put(
        "/api/profile",
        json={"name": "Ana R.", "weight": 60, "points": 99999},
        headers=headers,
    )
    assert resp.status_code == 200
    user = resp.get_json()["user"]
    assert user["name"] == "Ana R."
    assert user["weight"] == 60
    assert user["points"] == 0


def test_profile_update_rejects_bad_age(client):
    _, headers = register(client)
    resp = client.put("/api/profile", json={"age": 5}, headers=headers)
    assert resp.status_code == 400
    assert "age" in resp.get_json()["errors"]
