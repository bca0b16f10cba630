# fitgam/services.py
"""
Store-aware operations. Each one takes the store explicitly, reads what it
needs, runs the pure engine functions and writes the results back.
"""
import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from .challenges import calculate_challenge_progress, is_running
from .credentials import CredentialVerifier
from .gamification import apply_workout, award_bonus_points, score_workout, spend_points
from .models.notification import Notification
from .models.rewards import Redemption, Reward
from .models.social import Challenge
from .models.user import User
from .models.workout import Workout
from .store import LocalStore
from .utils import calendar_day, iso, utcnow
from .validation import ValidationError

logger = logging.getLogger(__name__)


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex[:12]}"


# ------------------------------
# Accounts
# ------------------------------
def signup(store: LocalStore, verifier: CredentialVerifier, clean: Dict[str, Any],
           now: Optional[datetime] = None) -> User:
    """
    Create the account from validated signup data and make it current.
    Raises ValidationError on a duplicate email; nothing is written then.
    """
    now = now or utcnow()
    if store.find_user_by_email(clean["email"]):
        raise ValidationError(
            {"email": "An account with this email already exists."},
            message="email already in use",
        )

    user = User(
        id=new_id("user"),
        email=clean["email"],
        name=clean["name"],
        age=clean.get("age", 0),
        weight=clean.get("weight", 0.0),
        height=clean.get("height", 0.0),
        profile_picture=clean.get("profile_picture"),
        fitness_goals=list(clean.get("fitness_goals") or []),
        activity_preferences=list(clean.get("activity_preferences") or []),
        created_at=iso(now),
    )

    if not store.set_credential(user.id, verifier.hash(clean["password"])):
        raise RuntimeError("could not store credentials")
    if not store.add_user(user):
        raise RuntimeError("could not store user")
    store.set_current_user(user)

    logger.info("signed up user_id=%s", user.id)
    return user


def authenticate(store: LocalStore, verifier: CredentialVerifier,
                 email: str, password: str) -> Optional[User]:
    user = store.find_user_by_email(email)
    if user is None:
        return None
    if not verifier.verify(store.get_credentials().get(user.id), password):
        return None
    store.set_current_user(user)
    return user


def update_profile(store: LocalStore, user: User, changes: Dict[str, Any]) -> User:
    updated = replace(user, **changes)
    store.update_user(updated)
    return updated


# ------------------------------
# Workouts
# ------------------------------
def log_workout(store: LocalStore, user: User, clean: Dict[str, Any],
                now: Optional[datetime] = None) -> Tuple[User, Workout, List[Notification]]:
    """
    Persist a workout, fold it into the user's stats and refresh the
    user's joined challenges. Returns the user, the stored workout and all
    notifications raised along the way (already persisted).
    """
    now = now or utcnow()
    workout = Workout(
        id=new_id("workout"),
        user_id=user.id,
        type=clean["type"],
        duration=clean["duration"],
        calories_burned=clean["calories_burned"],
        intensity_level=clean["intensity_level"],
        date=clean["date"],
        created_at=iso(now),
        distance=clean.get("distance"),
    )
    workout = replace(workout, points_earned=score_workout(workout))

    updated, events = apply_workout(user, workout, now)

    if not store.add_workout(workout):
        raise RuntimeError("could not store workout")
    if not store.update_user(updated):
        store.delete_workout(workout.id)
        raise RuntimeError("could not update user")

    updated, challenge_events = sync_challenge_progress(store, updated, now)
    events.extend(challenge_events)

    store.add_notifications(events)
    logger.info(
        "logged workout_id=%s user_id=%s points=%s",
        workout.id, user.id, workout.points_earned,
    )
    return updated, workout, events


def edit_workout(store: LocalStore, workout: Workout, changes: Dict[str, Any]) -> Workout:
    """Narrow update: fields change, points and user stats stay as logged."""
    updated = replace(workout, **changes)
    store.update_workout(updated)
    return updated


# ------------------------------
# Challenges
# ------------------------------
def create_challenge(store: LocalStore, user: User, clean: Dict[str, Any]) -> Challenge:
    start = calendar_day(clean["start_date"])
    end = start + timedelta(days=clean["duration"])
    challenge = Challenge(
        id=new_id("challenge"),
        title=clean["title"],
        description=clean["description"],
        type=clean["type"],
        target=clean["target"],
        bonus_points=clean["bonus_points"],
        duration=clean["duration"],
        start_date=clean["start_date"],
        end_date=end.isoformat(),
        participants=[],
        is_active=True,
        created_by=user.id,
    )
    store.add_challenge(challenge)
    return challenge


def join_challenge(store: LocalStore, user: User, challenge: Challenge,
                   now: Optional[datetime] = None) -> Tuple[User, bool]:
    """
    Record the user on the challenge and the challenge on the user.
    Returns (user, joined_now); joining twice is a no-op.
    """
    now = now or utcnow()
    if user.id in challenge.participants:
        return user, False

    challenge.participants = list(challenge.participants) + [user.id]
    store.update_challenge(challenge)

    joined = list(user.joined_challenges)
    if challenge.id not in joined:
        joined.append(challenge.id)
    updated = replace(user, joined_challenges=joined)
    store.update_user(updated)

    # count workouts already in the window right away
    updated, events = sync_challenge_progress(store, updated, now, only=[challenge.id])
    store.add_notifications(events)
    return updated, True


def sync_challenge_progress(store: LocalStore, user: User, now: Optional[datetime] = None,
                            only: Optional[List[str]] = None) -> Tuple[User, List[Notification]]:
    """
    Recompute and store progress for the user's joined, running challenges.
    The first time one reaches 100% its bonus points are awarded.
    Returned notifications are NOT persisted here.
    """
    now = now or utcnow()
    workouts = store.workouts_for_user(user.id)
    events: List[Notification] = []

    for challenge in store.get_challenges():
        if user.id not in challenge.participants:
            continue
        if only is not None and challenge.id not in only:
            continue
        if not is_running(challenge, now):
            continue

        existing = store.find_progress(user.id, challenge.id)
        if existing is not None and existing.completed:
            continue

        progress = calculate_challenge_progress(user, challenge, workouts, existing)
        record = store.update_user_progress(user.id, challenge.id, progress, now)
        if record is None or not record.completed:
            continue

        user, level_events = award_bonus_points(user, challenge.bonus_points, now)
        store.update_user(user)
        events.append(
            Notification(
                id=new_id("challenge_complete"),
                user_id=user.id,
                type="challenge_complete",
                title="Challenge Complete!",
                message=(
                    f'You completed "{challenge.title}" and earned '
                    f"{challenge.bonus_points} bonus points!"
                ),
                created_at=iso(now),
            )
        )
        events.extend(level_events)
        logger.info("challenge_id=%s completed by user_id=%s", challenge.id, user.id)

    return user, events


# ------------------------------
# Rewards
# ------------------------------
class RedemptionError(Exception):
    def __init__(self, message: str, status: int = 400, **extra):
        super().__init__(message)
        self.message = message
        self.status = status
        self.extra = extra


def redeem_reward(store: LocalStore, user: User, reward: Reward,
                  now: Optional[datetime] = None) -> Tuple[User, Redemption]:
    now = now or utcnow()

    if any(r.reward_id == reward.id for r in store.redemptions_for_user(user.id)):
        raise RedemptionError("reward already redeemed", status=409)

    if user.points < reward.points_cost:
        raise RedemptionError(
            "insufficient points",
            points_needed=reward.points_cost - user.points,
        )

    redemption = Redemption(
        id=new_id("redemption"),
        user_id=user.id,
        reward_id=reward.id,
        points_spent=reward.points_cost,
        redeemed_at=iso(now),
    )
    updated = spend_points(user, reward.points_cost)

    # ledger first: a user never pays without a recorded redemption
    if not store.add_redemption(redemption):
        raise RedemptionError("could not record redemption", status=500)
    if not store.update_user(updated):
        store.remove_redemption(redemption.id)
        raise RedemptionError("could not update user", status=500)

    logger.info("user_id=%s redeemed reward_id=%s", user.id, reward.id)
    return updated, redemption
