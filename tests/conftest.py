# tests/conftest.py
from datetime import datetime, timedelta

import pytest

from config import Config
from fitgam import create_app


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key-with-enough-length-000"
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length-000"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    AUTH_SIMULATED_DELAY_SECONDS = 0
    SEED_DEFAULT_DATA = True
    DEMO_USER_PASSWORD = "demo1234"


@pytest.fixture
def app():
    return create_app(TestingConfig)


@pytest.fixture
def client(app):
    return app.test_client()


def today_str() -> str:
    return datetime.utcnow().date().isoformat()


def days_ago_str(n: int) -> str:
    return (datetime.utcnow().date() - timedelta(days=n)).isoformat()


SIGNUP = {
    "name": "Ana Runner",
    "email": "ana@example.com",
    "password": "secret123",
    "confirm_password": "secret123",
    "age": 30,
    "weight": 62,
    "height": 168,
    "fitness_goals": ["Lose Weight"],
    "activity_preferences": ["Running"],
}


def register(client, **overrides):
    payload = dict(SIGNUP, **overrides)
    resp = client.post("/api/auth/register", json=payload)
    assert resp.status_code == 201, resp.get_json()
    data = resp.get_json()
    return data["user"], {"Authorization": f"Bearer {data['token']}"}


def workout_payload(**overrides):
    payload = {
        "type": "gym",
        "duration": 30,
        "calories_burned": 100,
        "intensity_level": 1,
        "date": today_str(),
    }
    payload.update(overrides)
    return payload
