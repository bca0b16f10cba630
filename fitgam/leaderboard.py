# fitgam/leaderboard.py
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .models.user import User

# metric name -> User attribute it sorts by
LEADERBOARD_METRICS = {
    "points": "points",
    "workouts": "total_workouts",
    "calories": "total_calories_burned",
    "streak": "workout_streak",
}


@dataclass
class LeaderboardEntry:
    user_id: str
    name: str
    profile_picture: Optional[str]
    points: int
    level: int
    total_workouts: int
    total_calories_burned: int
    workout_streak: int
    rank: int = 0

    @classmethod
    def from_user(cls, user: User) -> "LeaderboardEntry":
        return cls(
            user_id=user.id,
            name=user.name,
            profile_picture=user.profile_picture,
            points=user.points,
            level=user.level,
            total_workouts=user.total_workouts,
            total_calories_burned=user.total_calories_burned,
            workout_streak=user.workout_streak,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "profile_picture": self.profile_picture,
            "points": self.points,
            "level": self.level,
            "total_workouts": self.total_workouts,
            "total_calories_burned": self.total_calories_burned,
            "workout_streak": self.workout_streak,
            "rank": self.rank,
        }


def rank_users(users: List[User], metric: str) -> List[LeaderboardEntry]:
    """
    Descending by metric. Ties keep their input order and still get
    distinct consecutive ranks (1-based position, no shared ranks).
    """
    try:
        attr = LEADERBOARD_METRICS[metric]
    except KeyError:
        raise ValueError(f"unknown leaderboard metric: {metric}")

    entries = [LeaderboardEntry.from_user(u) for u in users]
    # sorted() is stable, also with reverse=True
    ordered = sorted(entries, key=lambda e: getattr(e, attr), reverse=True)
    for position, entry in enumerate(ordered, start=1):
        entry.rank = position
    return ordered


def build_leaderboards(users: List[User]) -> Dict[str, List[LeaderboardEntry]]:
    return {metric: rank_users(users, metric) for metric in LEADERBOARD_METRICS}


def rank_of(entries: List[LeaderboardEntry], user_id: str) -> int:
    """Rank of user_id in entries, 0 when absent."""
    return next((e.rank for e in entries if e.user_id == user_id), 0)
