# fitgam/models/user.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Badge:
    id: str
    name: str
    description: str
    icon: str
    requirement: str
    earned_at: str
    category: str = "milestone"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "requirement": self.requirement,
            "earned_at": self.earned_at,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Badge":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            description=data.get("description", ""),
            icon=data.get("icon", ""),
            requirement=data.get("requirement", ""),
            earned_at=data.get("earned_at", ""),
            category=data.get("category", "milestone"),
        )


@dataclass
class User:
    id: str
    email: str
    name: str
    age: int = 0
    weight: float = 0.0
    height: float = 0.0
    profile_picture: Optional[str] = None
    fitness_goals: List[str] = field(default_factory=list)
    activity_preferences: List[str] = field(default_factory=list)

    # cumulative stats, written by the gamification engine
    points: int = 0
    level: int = 1
    badges: List[Badge] = field(default_factory=list)
    joined_challenges: List[str] = field(default_factory=list)
    friends: List[str] = field(default_factory=list)
    workout_streak: int = 0
    last_workout_date: Optional[str] = None
    total_workouts: int = 0
    total_calories_burned: int = 0

    created_at: str = ""

    def badge_ids(self) -> List[str]:
        return [b.id for b in self.badges]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "profile_picture": self.profile_picture,
            "age": self.age,
            "weight": self.weight,
            "height": self.height,
            "fitness_goals": list(self.fitness_goals),
            "activity_preferences": list(self.activity_preferences),
            "points": self.points,
            "level": self.level,
            "badges": [b.to_dict() for b in self.badges],
            "joined_challenges": list(self.joined_challenges),
            "friends": list(self.friends),
            "workout_streak": self.workout_streak,
            "last_workout_date": self.last_workout_date,
            "total_workouts": self.total_workouts,
            "total_calories_burned": self.total_calories_burned,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=data["id"],
            email=data.get("email", ""),
            name=data.get("name", ""),
            age=data.get("age", 0),
            weight=data.get("weight", 0.0),
            height=data.get("height", 0.0),
            profile_picture=data.get("profile_picture"),
            fitness_goals=list(data.get("fitness_goals") or []),
            activity_preferences=list(data.get("activity_preferences") or []),
            points=int(data.get("points") or 0),
            level=int(data.get("level") or 1),
            badges=[Badge.from_dict(b) for b in data.get("badges") or []],
            joined_challenges=list(data.get("joined_challenges") or []),
            friends=list(data.get("friends") or []),
            workout_streak=int(data.get("workout_streak") or 0),
            last_workout_date=data.get("last_workout_date"),
            total_workouts=int(data.get("total_workouts") or 0),
            total_calories_burned=data.get("total_calories_burned") or 0,
            created_at=data.get("created_at", ""),
        )
