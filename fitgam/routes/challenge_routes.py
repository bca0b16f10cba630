# fitgam/routes/challenge_routes.py
from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required, get_jwt_identity

from .. import get_store
from ..challenges import (
    calculate_challenge_progress,
    challenge_payload,
    group_challenges,
    is_running,
)
from ..services import create_challenge as store_challenge
from ..services import join_challenge as join_user
from ..utils import utcnow
from ..validation import validate_challenge

challenges_bp = Blueprint("challenges", __name__)


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

@challenges_bp.route("", methods=["GET"])
@jwt_required()
def get_challenges():
    """
    Returns:
    {
      "available": [ {challenge..., "progress": 0, "has_joined": false}, ... ],
      "joined":    [ ... ],
      "completed": [ ... ]
    }
    """
    store = get_store()
    user = store.find_user(get_jwt_identity())
    if not user:
        return jsonify({"message": "user not found"}), 404

    grouped = group_challenges(
        user,
        store.get_challenges(),
        store.workouts_for_user(user.id),
        store.get_user_progress(),
        utcnow(),
    )
    return jsonify(grouped), 200


@challenges_bp.route("/<challenge_id>", methods=["GET"])
@jwt_required()
def get_challenge(challenge_id: str):
    store = get_store()
    user = store.find_user(get_jwt_identity())
    if not user:
        return jsonify({"message": "user not found"}), 404

    challenge = store.find_challenge(challenge_id)
    if not challenge:
        return jsonify({"message": "challenge not found"}), 404

    progress = calculate_challenge_progress(
        user,
        challenge,
        store.workouts_for_user(user.id),
        store.find_progress(user.id, challenge.id),
    )
    return jsonify(
        {"challenge": challenge_payload(challenge, progress, user.id in challenge.participants)}
    ), 200


# ---------------------------------------------------------------------------
# Authoring
# ---------------------------------------------------------------------------

@challenges_bp.route("", methods=["POST"])
@jwt_required()
def create_challenge():
    """
    Body:
    {
      "title": "Weekend Runner",
      "description": "...",
      "type": "distance",       # distance | duration | frequency | calories
      "target": 10,
      "bonus_points": 200,
      "duration": 3,            # days
      "start_date": "2025-11-21"   # optional, defaults to now
    }
    """
    store = get_store()
    user = store.find_user(get_jwt_identity())
    if not user:
        return jsonify({"message": "user not found"}), 404

    data = request.get_json(silent=True) or {}
    clean, errors = validate_challenge(data, utcnow())
    if errors:
        return jsonify({"message": "invalid challenge", "errors": errors}), 400

    challenge = store_challenge(store, user, clean)
    return jsonify({"challenge": challenge_payload(challenge, 0, False)}), 201


# ---------------------------------------------------------------------------
# Joining
# ---------------------------------------------------------------------------

@challenges_bp.route("/<challenge_id>/join", methods=["POST"])
@jwt_required()
def join_challenge(challenge_id: str):
    store = get_store()
    user = store.find_user(get_jwt_identity())
    if not user:
        return jsonify({"message": "user not found"}), 404

    challenge = store.find_challenge(challenge_id)
    if not challenge or not challenge.is_active:
        return jsonify({"message": "challenge not found or inactive"}), 404

    now = utcnow()
    if not is_running(challenge, now):
        return jsonify({"message": "challenge has ended"}), 400

    user, joined_now = join_user(store, user, challenge, now)
    if not joined_now:
        return jsonify({"message": "already joined", "challenge_id": challenge_id}), 200

    return jsonify(
        {
            "message": "joined challenge",
            "challenge_id": challenge_id,
            "user": user.to_dict(),
        }
    ), 201
