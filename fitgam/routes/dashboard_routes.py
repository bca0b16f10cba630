# fitgam/routes/dashboard_routes.py
from datetime import timedelta

from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity

from .. import get_store
from ..challenges import calculate_challenge_progress, is_running
from ..gamification import points_for_next_level
from ..utils import calendar_day, utcnow

# Blueprint for dashboard-related endpoints
dashboard_bp = Blueprint("dashboard", __name__)


# -------------------------
# DASHBOARD OVERVIEW
# -------------------------
@dashboard_bp.route("/overview", methods=["GET"])
@jwt_required()
def dashboard_overview():
    store = get_store()
    user = store.find_user(get_jwt_identity())
    if not user:
        return jsonify({"message": "user not found"}), 404

    now = utcnow()
    today = now.date()
    week_start = today - timedelta(days=6)

    workouts = store.workouts_for_user(user.id)

    stats_by_date = {}
    for w in workouts:
        day = calendar_day(w.date)
        if day is None or not (week_start <= day <= today):
            continue
        row = stats_by_date.setdefault(
            day, {"points": 0, "workouts": 0, "duration": 0, "calories": 0}
        )
        row["points"] += w.points_earned
        row["workouts"] += 1
        row["duration"] += w.duration
        row["calories"] += w.calories_burned

    by_day = []
    total_points = total_workouts = total_duration = total_calories = 0

    for i in range(7):
        d = week_start + timedelta(days=i)
        row = stats_by_date.get(d) or {}

        p = row.get("points", 0)
        n = row.get("workouts", 0)
        dur = row.get("duration", 0)
        cal = row.get("calories", 0)

        total_points += p
        total_workouts += n
        total_duration += dur
        total_calories += cal

        by_day.append(
            {
                "date": d.isoformat(),
                "points": p,
                "workouts": n,
                "duration": dur,
                "calories": cal,
            }
        )

    last7days = {
        "total_points": total_points,
        "total_workouts": total_workouts,
        "total_duration": total_duration,
        "total_calories": total_calories,
        "by_day": by_day,
    }

    active_challenges = []
    for challenge in store.get_challenges():
        if user.id not in challenge.participants or not is_running(challenge, now):
            continue
        progress = calculate_challenge_progress(
            user, challenge, workouts, store.find_progress(user.id, challenge.id)
        )
        active_challenges.append(
            {
                "id": challenge.id,
                "title": challenge.title,
                "type": challenge.type,
                "bonus_points": challenge.bonus_points,
                "progress": round(progress, 2),
            }
        )

    recent = sorted(workouts, key=lambda w: (w.date, w.created_at), reverse=True)[:5]
    unread = sum(1 for n in store.notifications_for_user(user.id) if not n.is_read)

    return (
        jsonify(
            {
                "user": user.to_dict(),
                "level": {
                    "level": user.level,
                    "points": user.points,
                    "points_to_next_level": points_for_next_level(user.points),
                },
                "streak": {
                    "workout_streak": user.workout_streak,
                    "last_workout_date": user.last_workout_date,
                },
                "last7days": last7days,
                "recent_workouts": [w.to_dict() for w in recent],
                "active_challenges": active_challenges,
                "unread_notifications": unread,
            }
        ),
        200,
    )
