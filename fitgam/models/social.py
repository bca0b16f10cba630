# fitgam/models/social.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

CHALLENGE_TYPES = ("distance", "duration", "frequency", "calories")


# -----------------------------
# Challenges
# -----------------------------
@dataclass
class Challenge:
    id: str
    title: str
    description: str
    type: str                   # one of CHALLENGE_TYPES
    target: float
    bonus_points: int
    duration: int               # days
    start_date: str
    end_date: str
    participants: List[str] = field(default_factory=list)
    is_active: bool = True
    created_by: str = "system"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "type": self.type,
            "target": self.target,
            "bonus_points": self.bonus_points,
            "duration": self.duration,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "participants": list(self.participants),
            "is_active": self.is_active,
            "created_by": self.created_by,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Challenge":
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            description=data.get("description", ""),
            type=data.get("type", "frequency"),
            target=data.get("target") or 0,
            bonus_points=data.get("bonus_points") or 0,
            duration=data.get("duration") or 0,
            start_date=data.get("start_date", ""),
            end_date=data.get("end_date", ""),
            participants=list(data.get("participants") or []),
            is_active=bool(data.get("is_active", True)),
            created_by=data.get("created_by", "system"),
        )


# -----------------------------
# Per-user challenge progress snapshot
# -----------------------------
@dataclass
class UserProgress:
    user_id: str
    challenge_id: str
    progress: float = 0
    completed: bool = False
    completed_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "challenge_id": self.challenge_id,
            "progress": self.progress,
            "completed": self.completed,
            "completed_at": self.completed_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProgress":
        return cls(
            user_id=data["user_id"],
            challenge_id=data["challenge_id"],
            progress=data.get("progress") or 0,
            completed=bool(data.get("completed", False)),
            completed_at=data.get("completed_at"),
        )
