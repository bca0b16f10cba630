# fitgam/models/rewards.py
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Reward:
    """Catalog item. Who redeemed it lives in the Redemption ledger."""

    id: str
    name: str
    description: str
    points_cost: int
    type: str
    category: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "points_cost": self.points_cost,
            "type": self.type,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Reward":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            description=data.get("description", ""),
            points_cost=int(data.get("points_cost") or 0),
            type=data.get("type", "virtual"),
            category=data.get("category", ""),
        )


@dataclass(frozen=True)
class Redemption:
    id: str
    user_id: str
    reward_id: str
    points_spent: int
    redeemed_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "reward_id": self.reward_id,
            "points_spent": self.points_spent,
            "redeemed_at": self.redeemed_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Redemption":
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            reward_id=data["reward_id"],
            points_spent=int(data.get("points_spent") or 0),
            redeemed_at=data.get("redeemed_at", ""),
        )
