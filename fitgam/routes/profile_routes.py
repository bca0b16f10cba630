# fitgam/routes/profile_routes.py
from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity

from .. import get_store
from ..gamification import points_for_next_level
from ..services import update_profile as apply_profile_changes
from ..validation import validate_profile_update

profile_bp = Blueprint("profile", __name__)


@profile_bp.route("", methods=["GET"])
@jwt_required()
def get_profile():
    user = get_store().find_user(get_jwt_identity())
    if not user:
        return jsonify({"message": "user not found"}), 404

    return jsonify(
        {
            "user": user.to_dict(),
            "points_to_next_level": points_for_next_level(user.points),
        }
    ), 200


@profile_bp.route("", methods=["PUT"])
@jwt_required()
def update_profile():
    store = get_store()
    user = store.find_user(get_jwt_identity())
    if not user:
        return jsonify({"message": "user not found"}), 404

    data = request.get_json(silent=True) or {}

    changes, errors = validate_profile_update(data)
    if errors:
        return jsonify({"message": "invalid profile data", "errors": errors}), 400

    user = apply_profile_changes(store, user, changes)
    return jsonify({"user": user.to_dict()}), 200
