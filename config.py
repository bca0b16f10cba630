# fitgam/config.py
import os
from datetime import timedelta


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", "dev-jwt-secret-change-me")

    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "mysql+pymysql://root:@localhost/fitgam"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # 🔐 JWT config
    JWT_TOKEN_LOCATION = ["headers"]     # where to look for tokens
    JWT_HEADER_NAME = "Authorization"    # header name
    JWT_HEADER_TYPE = "Bearer"           # expected prefix
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)  # dev: 7 days

    # login/signup wait this long to mimic a remote round trip
    AUTH_SIMULATED_DELAY_SECONDS = float(
        os.environ.get("AUTH_SIMULATED_DELAY_SECONDS", "1.0")
    )

    # demo user + challenge / reward catalog on first run
    SEED_DEFAULT_DATA = _env_bool("SEED_DEFAULT_DATA", True)
    DEMO_USER_PASSWORD = os.environ.get("DEMO_USER_PASSWORD", "demo1234")
