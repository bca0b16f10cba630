# fitgam/routes/notification_routes.py
from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required, get_jwt_identity

from .. import get_store

notifications_bp = Blueprint("notifications", __name__)


@notifications_bp.route("", methods=["GET"])
@jwt_required()
def list_notifications():
    user_id = get_jwt_identity()
    unread_only = request.args.get("unread") in ("1", "true", "yes")

    rows = get_store().notifications_for_user(user_id)
    unread_count = sum(1 for n in rows if not n.is_read)
    if unread_only:
        rows = [n for n in rows if not n.is_read]

    return jsonify(
        {
            "notifications": [n.to_dict() for n in rows],
            "unread_count": unread_count,
        }
    ), 200


@notifications_bp.route("/<notification_id>/read", methods=["POST"])
@jwt_required()
def mark_read(notification_id: str):
    if not get_store().mark_notification_read(get_jwt_identity(), notification_id):
        return jsonify({"message": "notification not found"}), 404
    return jsonify({"message": "marked as read", "id": notification_id}), 200


@notifications_bp.route("/read-all", methods=["POST"])
@jwt_required()
def mark_all_read():
    changed = get_store().mark_all_notifications_read(get_jwt_identity())
    return jsonify({"message": "all marked as read", "updated": changed}), 200
