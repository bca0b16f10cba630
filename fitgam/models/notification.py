# fitgam/models/notification.py
from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class Notification:
    id: str
    user_id: str
    type: str
    title: str
    message: str
    created_at: str
    is_read: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "is_read": self.is_read,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Notification":
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            type=data.get("type", "badge_earned"),
            title=data.get("title", ""),
            message=data.get("message", ""),
            created_at=data.get("created_at", ""),
            is_read=bool(data.get("is_read", False)),
        )
