# fitgam/seed.py
import logging
from datetime import datetime, timedelta
from typing import Optional

from .credentials import CredentialVerifier
from .models.rewards import Reward
from .models.social import Challenge
from .models.user import User
from .store import LocalStore
from .utils import iso, utcnow

logger = logging.getLogger(__name__)

DEMO_USER = {
    "id": "demo_user",
    "email": "demo@fitgam.app",
    "name": "Demo Athlete",
    "age": 28,
    "weight": 70.0,
    "height": 175.0,
    "fitness_goals": ["Stay Active"],
    "activity_preferences": ["Running", "Gym"],
}

DEFAULT_CHALLENGES = [
    {
        "id": "1",
        "title": "Weekly Warrior",
        "description": "Complete 5 workouts in 7 days",
        "type": "frequency",
        "target": 5,
        "bonus_points": 500,
        "duration": 7,
    },
    {
        "id": "2",
        "title": "Distance Champion",
        "description": "Run or cycle 25km in 14 days",
        "type": "distance",
        "target": 25,
        "bonus_points": 750,
        "duration": 14,
    },
    {
        "id": "3",
        "title": "Calorie Crusher",
        "description": "Burn 2000 calories in 10 days",
        "type": "calories",
        "target": 2000,
        "bonus_points": 600,
        "duration": 10,
    },
]

DEFAULT_REWARDS = [
    {
        "id": "1",
        "name": "Premium Theme",
        "description": "Unlock exclusive app themes",
        "points_cost": 1000,
        "type": "premium",
        "category": "Customization",
    },
    {
        "id": "2",
        "name": "Workout Playlist",
        "description": "Access to premium workout music",
        "points_cost": 500,
        "type": "virtual",
        "category": "Entertainment",
    },
    {
        "id": "3",
        "name": "Gym Discount",
        "description": "20% off at partner gyms",
        "points_cost": 2000,
        "type": "discount",
        "category": "Fitness",
    },
    {
        "id": "4",
        "name": "Personal Trainer Session",
        "description": "Free 1-hour session with certified trainer",
        "points_cost": 3000,
        "type": "premium",
        "category": "Fitness",
    },
]


def initialize_default_data(
    store: LocalStore,
    verifier: CredentialVerifier,
    demo_password: str,
    now: Optional[datetime] = None,
) -> dict:
    """
    Fill empty collections with the demo user, challenges and rewards.
    Collections that already hold data are left untouched.
    Returns how many records of each kind were added.
    """
    now = now or utcnow()
    added = {"users": 0, "challenges": 0, "rewards": 0}

    if not store.get_users():
        demo = User(created_at=iso(now), **DEMO_USER)
        if store.add_user(demo) and store.set_credential(demo.id, verifier.hash(demo_password)):
            added["users"] = 1

    if not store.get_challenges():
        challenges = [
            Challenge(
                start_date=iso(now),
                end_date=iso(now + timedelta(days=item["duration"])),
                participants=[],
                is_active=True,
                created_by="system",
                **item,
            )
            for item in DEFAULT_CHALLENGES
        ]
        if store.set_challenges(challenges):
            added["challenges"] = len(challenges)

    if not store.get_rewards():
        rewards = [Reward(**item) for item in DEFAULT_REWARDS]
        if store.set_rewards(rewards):
            added["rewards"] = len(rewards)

    if any(added.values()):
        logger.info("seeded default data: %s", added)
    return added
