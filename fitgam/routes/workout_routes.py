# fitgam/routes/workout_routes.py
from typing import List

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required, get_jwt_identity

from .. import get_store
from ..models.workout import Workout
from ..services import edit_workout, log_workout
from ..utils import safe_int
from ..validation import validate_workout

workouts_bp = Blueprint("workouts", __name__)


# ------------------------------
# Helpers
# ------------------------------
def _newest_first(workouts: List[Workout]) -> List[Workout]:
    return sorted(workouts, key=lambda w: (w.date, w.created_at), reverse=True)


def _own_workout(user_id: str, workout_id: str):
    return next(
        (w for w in get_store().workouts_for_user(user_id) if w.id == workout_id),
        None,
    )


# ------------------------------
# GET /api/workouts
# ------------------------------
@workouts_bp.route("", methods=["GET"])
@jwt_required()
def list_workouts():
    user_id = get_jwt_identity()
    workout_type = request.args.get("type")

    rows = get_store().workouts_for_user(user_id)
    if workout_type:
        rows = [w for w in rows if w.type == workout_type]

    return jsonify({"workouts": [w.to_dict() for w in _newest_first(rows)]}), 200


# ------------------------------
# GET /api/workouts/recent?limit=5
# ------------------------------
@workouts_bp.route("/recent", methods=["GET"])
@jwt_required()
def recent_workouts():
    user_id = get_jwt_identity()
    limit = safe_int(request.args.get("limit"), 5)
    limit = max(1, min(limit, 50))

    rows = _newest_first(get_store().workouts_for_user(user_id))[:limit]
    return jsonify({"workouts": [w.to_dict() for w in rows]}), 200


# ------------------------------
# POST /api/workouts
# ------------------------------
@workouts_bp.route("", methods=["POST"])
@jwt_required()
def create_workout():
    """
    Expected body:
    {
      "type": "running",
      "duration": 30,
      "distance": 5.0,          # optional, km
      "calories_burned": 300,
      "intensity_level": 3,
      "date": "2025-11-21"
    }
    """
    store = get_store()
    user = store.find_user(get_jwt_identity())
    if not user:
        return jsonify({"message": "user not found"}), 404

    data = request.get_json(silent=True) or {}
    clean, errors = validate_workout(data)
    if errors:
        return jsonify({"message": "invalid workout", "errors": errors}), 400

    try:
        user, workout, events = log_workout(store, user, clean)
    except RuntimeError as e:
        current_app.logger.exception(f"[workouts] log failed: {e}")
        return jsonify({"message": "Failed to log workout"}), 500

    current_app.logger.info(
        f"[workouts] user_id={user.id} +{workout.points_earned} pts, "
        f"{len(events)} notifications"
    )

    return jsonify(
        {
            "message": "Workout logged",
            "workout": workout.to_dict(),
            "points_earned": workout.points_earned,
            "user": user.to_dict(),
            "notifications": [n.to_dict() for n in events],
        }
    ), 201


# ------------------------------
# PUT /api/workouts/<id>
# ------------------------------
@workouts_bp.route("/<workout_id>", methods=["PUT"])
@jwt_required()
def update_workout(workout_id: str):
    workout = _own_workout(get_jwt_identity(), workout_id)
    if not workout:
        return jsonify({"message": "workout not found"}), 404

    data = request.get_json(silent=True) or {}
    changes, errors = validate_workout(data, partial=True)
    if errors:
        return jsonify({"message": "invalid workout", "errors": errors}), 400

    workout = edit_workout(get_store(), workout, changes)
    return jsonify({"workout": workout.to_dict()}), 200


# ------------------------------
# DELETE /api/workouts/<id>
# ------------------------------
@workouts_bp.route("/<workout_id>", methods=["DELETE"])
@jwt_required()
def delete_workout(workout_id: str):
    # missing ids are a silent no-op
    deleted = False
    if _own_workout(get_jwt_identity(), workout_id):
        deleted = get_store().delete_workout(workout_id)

    return jsonify({"message": "Workout deleted", "deleted": deleted}), 200
