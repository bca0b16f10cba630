# fitgam/routes/auth_routes.py
import time

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import create_access_token, get_jwt_identity, jwt_required

from .. import get_store, get_verifier
from ..services import authenticate, signup
from ..validation import ValidationError, validate_login, validate_signup

auth_bp = Blueprint("auth", __name__)


def _simulate_round_trip() -> None:
    delay = float(current_app.config.get("AUTH_SIMULATED_DELAY_SECONDS", 0) or 0)
    if delay > 0:
        time.sleep(delay)


# -----------------------------
# Routes
# -----------------------------
@auth_bp.route("/register", methods=["POST"])
def register():
    data = request.get_json(silent=True) or {}

    clean, errors = validate_signup(data)
    if errors:
        return jsonify({"message": "invalid signup data", "errors": errors}), 400

    _simulate_round_trip()

    try:
        user = signup(get_store(), get_verifier(), clean)
    except ValidationError as e:
        return jsonify({"message": e.message, "errors": e.errors}), 400
    except RuntimeError as e:
        current_app.logger.exception(f"Registration Error: {e}")
        return jsonify({"message": "Internal server error"}), 500

    access_token = create_access_token(identity=user.id)
    return jsonify({"token": access_token, "user": user.to_dict()}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    """
    Accepts: { "email": "...", "password": "..." }
    """
    data = request.get_json(silent=True) or {}

    clean, errors = validate_login(data)
    if errors:
        return jsonify({"message": "email and password are required", "errors": errors}), 400

    # never log the password
    current_app.logger.info(f"[auth/login] email='{clean['email']}'")

    _simulate_round_trip()

    user = authenticate(get_store(), get_verifier(), clean["email"], clean["password"])
    if not user:
        current_app.logger.info(f"[auth/login] rejected for '{clean['email']}'")
        return jsonify({"message": "invalid credentials"}), 401

    access_token = create_access_token(identity=user.id)
    return jsonify({"token": access_token, "user": user.to_dict()}), 200


@auth_bp.route("/logout", methods=["POST"])
@jwt_required()
def logout():
    store = get_store()
    current = store.get_current_user()
    if current is not None and current.id == get_jwt_identity():
        store.set_current_user(None)
    return jsonify({"message": "logged out"}), 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    user = get_store().find_user(get_jwt_identity())
    if not user:
        return jsonify({"message": "user not found"}), 404
    return jsonify({"user": user.to_dict()}), 200
