# fitgam/__init__.py
import logging

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager

from config import Config

db = SQLAlchemy()
jwt = JWTManager()


def get_store():
    """The LocalStore bound to the running app."""
    return current_app.extensions["fitgam_store"]


def get_verifier():
    return current_app.extensions["fitgam_verifier"]


def _configure_logging(app: Flask) -> None:
    level = logging.DEBUG if app.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    _configure_logging(app)

    # Init extensions
    db.init_app(app)
    jwt.init_app(app)

    # CORS: allow the web client (and others) to call /api/*
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    from .credentials import WerkzeugCredentialVerifier
    from .store import LocalStore

    app.extensions["fitgam_store"] = LocalStore(db)
    app.extensions["fitgam_verifier"] = WerkzeugCredentialVerifier()

    # -----------------------------
    # JWT error handlers
    # -----------------------------
    @jwt.unauthorized_loader
    def unauthorized_callback(reason):
        return (
            jsonify(
                {
                    "message": "Missing or invalid auth token",
                    "error": reason,
                }
            ),
            401,
        )

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        return (
            jsonify(
                {
                    "message": "Invalid auth token",
                    "error": reason,
                }
            ),
            422,
        )

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"message": "Token has expired"}), 401

    # -----------------------------
    # JSON errors for the API
    # -----------------------------
    @app.errorhandler(400)
    @app.errorhandler(404)
    @app.errorhandler(405)
    @app.errorhandler(500)
    def _http_errors(err):
        if request.path.startswith("/api/"):
            code = getattr(err, "code", 500) or 500
            return jsonify({"message": getattr(err, "description", str(err))}), code
        return err

    # -----------------------------
    # IMPORT BLUEPRINTS (all routes)
    # -----------------------------
    from .routes.auth_routes import auth_bp
    from .routes.profile_routes import profile_bp
    from .routes.dashboard_routes import dashboard_bp
    from .routes.workout_routes import workouts_bp
    from .routes.challenge_routes import challenges_bp
    from .routes.leaderboard_routes import leaderboard_bp
    from .routes.rewards_routes import rewards_bp
    from .routes.notification_routes import notifications_bp

    # -----------------------------
    # REGISTER BLUEPRINTS
    # -----------------------------
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(profile_bp, url_prefix="/api/profile")
    app.register_blueprint(dashboard_bp, url_prefix="/api/dashboard")
    app.register_blueprint(workouts_bp, url_prefix="/api/workouts")
    app.register_blueprint(challenges_bp, url_prefix="/api/challenges")
    app.register_blueprint(leaderboard_bp, url_prefix="/api/leaderboard")
    app.register_blueprint(rewards_bp, url_prefix="/api/rewards")
    app.register_blueprint(notifications_bp, url_prefix="/api/notifications")

    from .commands import register_cli
    register_cli(app)

    @app.route("/api/health")
    def health():
        return {"status": "ok"}

    # -----------------------------
    # DB init + first-run data
    # -----------------------------
    from .models import store_entry  # noqa: F401  (registers the table)
    from .seed import initialize_default_data

    with app.app_context():
        db.create_all()
        if app.config.get("SEED_DEFAULT_DATA", True):
            initialize_default_data(
                get_store(), get_verifier(), app.config["DEMO_USER_PASSWORD"]
            )

    return app
