# fitgam/models/workout.py
from dataclasses import dataclass
from typing import Any, Dict, Optional

WORKOUT_TYPES = (
    "running",
    "cycling",
    "gym",
    "yoga",
    "swimming",
    "walking",
    "basketball",
    "football",
    "tennis",
    "other",
)


@dataclass(frozen=True)
class Workout:
    id: str
    user_id: str
    type: str
    duration: int               # minutes
    calories_burned: int
    intensity_level: int        # 1..5
    date: str                   # "YYYY-MM-DD" or ISO datetime
    created_at: str
    distance: Optional[float] = None   # km
    points_earned: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "type": self.type,
            "duration": self.duration,
            "distance": self.distance,
            "calories_burned": self.calories_burned,
            "intensity_level": self.intensity_level,
            "date": self.date,
            "created_at": self.created_at,
            "points_earned": self.points_earned,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Workout":
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            type=data.get("type", "other"),
            duration=data.get("duration") or 0,
            calories_burned=data.get("calories_burned") or 0,
            intensity_level=data.get("intensity_level") or 1,
            date=data.get("date", ""),
            created_at=data.get("created_at", ""),
            distance=data.get("distance"),
            points_earned=data.get("points_earned") or 0,
        )
