# fitgam/routes/leaderboard_routes.py
from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required, get_jwt_identity

from .. import get_store
from ..leaderboard import LEADERBOARD_METRICS, build_leaderboards, rank_of, rank_users
from ..utils import safe_int

leaderboard_bp = Blueprint("leaderboard", __name__)


@leaderboard_bp.route("", methods=["GET"])
@jwt_required()
def leaderboards():
    """
    All four rankings from one snapshot of the users, plus where the
    caller sits in each:
    {
      "leaderboards": {"points": [...], "workouts": [...], "calories": [...], "streak": [...]},
      "my_ranks": {"points": 2, "workouts": 1, "calories": 3, "streak": 1}
    }
    """
    user_id = get_jwt_identity()
    boards = build_leaderboards(get_store().get_users())

    return jsonify(
        {
            "leaderboards": {
                metric: [e.to_dict() for e in entries]
                for metric, entries in boards.items()
            },
            "my_ranks": {
                metric: rank_of(entries, user_id) for metric, entries in boards.items()
            },
        }
    ), 200


@leaderboard_bp.route("/<metric>", methods=["GET"])
@jwt_required()
def leaderboard_for_metric(metric: str):
    if metric not in LEADERBOARD_METRICS:
        return jsonify(
            {
                "message": "unknown metric",
                "metrics": sorted(LEADERBOARD_METRICS),
            }
        ), 404

    limit = safe_int(request.args.get("limit"), 0)
    entries = rank_users(get_store().get_users(), metric)
    my_rank = rank_of(entries, get_jwt_identity())
    if limit > 0:
        entries = entries[:limit]

    return jsonify(
        {
            "metric": metric,
            "entries": [e.to_dict() for e in entries],
            "my_rank": my_rank,
        }
    ), 200
