# fitgam/routes/rewards_routes.py
from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity

from .. import get_store
from ..gamification import BADGE_RULES, LEVEL_STEP_POINTS
from ..services import RedemptionError, redeem_reward

rewards_bp = Blueprint("rewards", __name__)


def _compute_next_level_points(level: int) -> int:
    """
    Points total at which the next level starts:
      - Level 1 -> 1000 pts
      - Level 2 -> 2000 pts total
      - Level 3 -> 3000 pts total
    """
    if level < 1:
        level = 1
    return level * LEVEL_STEP_POINTS


@rewards_bp.route("/overview", methods=["GET"])
@jwt_required()
def rewards_overview():
    """
    Returns:
    {
      "user": { ... user.to_dict() ... },
      "summary": {
        "total_points": 1200,
        "level": 2,
        "next_level_points": 2000,
        "earned_badges_count": 3,
        "redeemed_count": 1,
        "points_spent": 500
      },
      "badges": [ ...earned badges, newest first... ],
      "available": [ {reward..., "can_afford": true}, ... ],
      "redeemed": [ {reward..., "redeemed_at": "2025-11-21T10:05:00"}, ... ]
    }
    """
    store = get_store()
    user = store.find_user(get_jwt_identity())
    if not user:
        return jsonify({"message": "user not found"}), 404

    redemptions = store.redemptions_for_user(user.id)
    redeemed_at = {r.reward_id: r.redeemed_at for r in redemptions}

    available = []
    redeemed = []
    for reward in store.get_rewards():
        payload = reward.to_dict()
        if reward.id in redeemed_at:
            payload["redeemed_at"] = redeemed_at[reward.id]
            redeemed.append(payload)
        else:
            payload["can_afford"] = user.points >= reward.points_cost
            payload["points_needed"] = max(0, reward.points_cost - user.points)
            available.append(payload)

    badges = sorted(user.badges, key=lambda b: b.earned_at, reverse=True)

    summary = {
        "total_points": int(user.points),
        "level": int(user.level),
        "next_level_points": _compute_next_level_points(user.level),
        "earned_badges_count": len(badges),
        "catalog_badges_count": len(BADGE_RULES),
        "redeemed_count": len(redemptions),
        "points_spent": sum(r.points_spent for r in redemptions),
    }

    return (
        jsonify(
            {
                "user": user.to_dict(),
                "summary": summary,
                "badges": [b.to_dict() for b in badges],
                "available": available,
                "redeemed": redeemed,
            }
        ),
        200,
    )


@rewards_bp.route("/<reward_id>/redeem", methods=["POST"])
@jwt_required()
def redeem(reward_id: str):
    store = get_store()
    user = store.find_user(get_jwt_identity())
    if not user:
        return jsonify({"message": "user not found"}), 404

    reward = store.find_reward(reward_id)
    if not reward:
        return jsonify({"message": "reward not found"}), 404

    try:
        user, redemption = redeem_reward(store, user, reward)
    except RedemptionError as e:
        return jsonify({"message": e.message, **e.extra}), e.status

    return jsonify(
        {
            "message": f'Redeemed "{reward.name}"',
            "redemption": redemption.to_dict(),
            "user": user.to_dict(),
        }
    ), 200
