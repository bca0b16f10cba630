# fitgam/store.py
"""
Keyed JSON collections persisted through SQLAlchemy.

Every collection lives under a fixed key as one JSON document. Reads fall
back to an empty collection (or None) when the key is absent or its JSON
is unreadable; writes that fail are rolled back and logged, never raised.
There are no transactions spanning keys: the last write wins.
"""
import json
import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from .models.notification import Notification
from .models.rewards import Redemption, Reward
from .models.social import Challenge, UserProgress
from .models.store_entry import StoreEntry
from .models.user import User
from .models.workout import Workout
from .utils import iso, utcnow

logger = logging.getLogger(__name__)

T = TypeVar("T")

STORAGE_KEYS = {
    "USERS": "fitness_users",
    "CURRENT_USER": "fitness_current_user",
    "WORKOUTS": "fitness_workouts",
    "CHALLENGES": "fitness_challenges",
    "NOTIFICATIONS": "fitness_notifications",
    "REWARDS": "fitness_rewards",
    "USER_PROGRESS": "fitness_user_progress",
    "REDEMPTIONS": "fitness_redemptions",
    "CREDENTIALS": "fitness_credentials",
}


class LocalStore:
    def __init__(self, db):
        self.db = db

    # ------------------------------
    # Generic storage
    # ------------------------------
    def get_from_storage(self, key: str, default: Any = None) -> Any:
        try:
            row = self.db.session.get(StoreEntry, key)
        except SQLAlchemyError:
            self.db.session.rollback()
            logger.exception("Error reading %s from store", key)
            return default

        if row is None or not row.value:
            return default

        try:
            return json.loads(row.value)
        except ValueError:
            logger.warning("Corrupt JSON under %s, falling back to default", key)
            return default

    def set_to_storage(self, key: str, value: Any) -> bool:
        try:
            payload = json.dumps(value)
            row = self.db.session.get(StoreEntry, key)
            if row is None:
                self.db.session.add(StoreEntry(key=key, value=payload))
            else:
                row.value = payload
            self.db.session.commit()
            return True
        except (TypeError, ValueError, SQLAlchemyError):
            self.db.session.rollback()
            logger.exception("Error saving %s to store", key)
            return False

    def _load_list(self, key: str, factory: Callable[[Dict[str, Any]], T]) -> List[T]:
        raw = self.get_from_storage(key, [])
        if not isinstance(raw, list):
            logger.warning("Expected a list under %s, got %s", key, type(raw).__name__)
            return []

        items = []
        for entry in raw:
            try:
                items.append(factory(entry))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed record under %s: %r", key, entry)
        return items

    def _save_list(self, key: str, items) -> bool:
        return self.set_to_storage(key, [item.to_dict() for item in items])

    # ------------------------------
    # Users
    # ------------------------------
    def get_users(self) -> List[User]:
        return self._load_list(STORAGE_KEYS["USERS"], User.from_dict)

    def set_users(self, users: List[User]) -> bool:
        return self._save_list(STORAGE_KEYS["USERS"], users)

    def find_user(self, user_id: str) -> Optional[User]:
        return next((u for u in self.get_users() if u.id == user_id), None)

    def find_user_by_email(self, email: str) -> Optional[User]:
        email = (email or "").strip().lower()
        return next((u for u in self.get_users() if u.email.lower() == email), None)

    def add_user(self, user: User) -> bool:
        users = self.get_users()
        users.append(user)
        return self.set_users(users)

    def update_user(self, updated: User) -> bool:
        users = self.get_users()
        for idx, u in enumerate(users):
            if u.id == updated.id:
                users[idx] = updated
                break
        else:
            return False

        if not self.set_users(users):
            return False

        current = self.get_current_user()
        if current is not None and current.id == updated.id:
            self.set_current_user(updated)
        return True

    def get_current_user(self) -> Optional[User]:
        raw = self.get_from_storage(STORAGE_KEYS["CURRENT_USER"], None)
        if not raw:
            return None
        try:
            return User.from_dict(raw)
        except (KeyError, TypeError, ValueError):
            logger.warning("Malformed current user record, ignoring")
            return None

    def set_current_user(self, user: Optional[User]) -> bool:
        return self.set_to_storage(
            STORAGE_KEYS["CURRENT_USER"], user.to_dict() if user else None
        )

    # ------------------------------
    # Credentials (user id -> password hash)
    # ------------------------------
    def get_credentials(self) -> Dict[str, str]:
        raw = self.get_from_storage(STORAGE_KEYS["CREDENTIALS"], {})
        return raw if isinstance(raw, dict) else {}

    def set_credential(self, user_id: str, password_hash: str) -> bool:
        creds = self.get_credentials()
        creds[user_id] = password_hash
        return self.set_to_storage(STORAGE_KEYS["CREDENTIALS"], creds)

    # ------------------------------
    # Workouts
    # ------------------------------
    def get_workouts(self) -> List[Workout]:
        return self._load_list(STORAGE_KEYS["WORKOUTS"], Workout.from_dict)

    def set_workouts(self, workouts: List[Workout]) -> bool:
        return self._save_list(STORAGE_KEYS["WORKOUTS"], workouts)

    def workouts_for_user(self, user_id: str) -> List[Workout]:
        return [w for w in self.get_workouts() if w.user_id == user_id]

    def add_workout(self, workout: Workout) -> bool:
        workouts = self.get_workouts()
        workouts.append(workout)
        return self.set_workouts(workouts)

    def update_workout(self, updated: Workout) -> bool:
        workouts = self.get_workouts()
        for idx, w in enumerate(workouts):
            if w.id == updated.id:
                workouts[idx] = updated
                return self.set_workouts(workouts)
        return False

    def delete_workout(self, workout_id: str) -> bool:
        workouts = self.get_workouts()
        remaining = [w for w in workouts if w.id != workout_id]
        if len(remaining) == len(workouts):
            return False
        return self.set_workouts(remaining)

    # ------------------------------
    # Challenges
    # ------------------------------
    def get_challenges(self) -> List[Challenge]:
        return self._load_list(STORAGE_KEYS["CHALLENGES"], Challenge.from_dict)

    def set_challenges(self, challenges: List[Challenge]) -> bool:
        return self._save_list(STORAGE_KEYS["CHALLENGES"], challenges)

    def find_challenge(self, challenge_id: str) -> Optional[Challenge]:
        return next((c for c in self.get_challenges() if c.id == challenge_id), None)

    def add_challenge(self, challenge: Challenge) -> bool:
        challenges = self.get_challenges()
        challenges.append(challenge)
        return self.set_challenges(challenges)

    def update_challenge(self, updated: Challenge) -> bool:
        challenges = self.get_challenges()
        for idx, c in enumerate(challenges):
            if c.id == updated.id:
                challenges[idx] = updated
                return self.set_challenges(challenges)
        return False

    # ------------------------------
    # Notifications (newest first)
    # ------------------------------
    def get_notifications(self) -> List[Notification]:
        return self._load_list(STORAGE_KEYS["NOTIFICATIONS"], Notification.from_dict)

    def set_notifications(self, notifications: List[Notification]) -> bool:
        return self._save_list(STORAGE_KEYS["NOTIFICATIONS"], notifications)

    def notifications_for_user(self, user_id: str) -> List[Notification]:
        return [n for n in self.get_notifications() if n.user_id == user_id]

    def add_notification(self, notification: Notification) -> bool:
        notifications = self.get_notifications()
        notifications.insert(0, notification)
        return self.set_notifications(notifications)

    def add_notifications(self, new: List[Notification]) -> bool:
        """Insert several at once; the last one in `new` ends up on top."""
        if not new:
            return True
        notifications = self.get_notifications()
        for n in new:
            notifications.insert(0, n)
        return self.set_notifications(notifications)

    def mark_notification_read(self, user_id: str, notification_id: str) -> bool:
        notifications = self.get_notifications()
        for n in notifications:
            if n.id == notification_id and n.user_id == user_id:
                n.is_read = True
                return self.set_notifications(notifications)
        return False

    def mark_all_notifications_read(self, user_id: str) -> int:
        notifications = self.get_notifications()
        changed = 0
        for n in notifications:
            if n.user_id == user_id and not n.is_read:
                n.is_read = True
                changed += 1
        if changed and not self.set_notifications(notifications):
            return 0
        return changed

    # ------------------------------
    # Rewards + redemption ledger
    # ------------------------------
    def get_rewards(self) -> List[Reward]:
        return self._load_list(STORAGE_KEYS["REWARDS"], Reward.from_dict)

    def set_rewards(self, rewards: List[Reward]) -> bool:
        return self._save_list(STORAGE_KEYS["REWARDS"], rewards)

    def find_reward(self, reward_id: str) -> Optional[Reward]:
        return next((r for r in self.get_rewards() if r.id == reward_id), None)

    def get_redemptions(self) -> List[Redemption]:
        return self._load_list(STORAGE_KEYS["REDEMPTIONS"], Redemption.from_dict)

    def redemptions_for_user(self, user_id: str) -> List[Redemption]:
        return [r for r in self.get_redemptions() if r.user_id == user_id]

    def add_redemption(self, redemption: Redemption) -> bool:
        redemptions = self.get_redemptions()
        redemptions.append(redemption)
        return self._save_list(STORAGE_KEYS["REDEMPTIONS"], redemptions)

    def remove_redemption(self, redemption_id: str) -> bool:
        redemptions = self.get_redemptions()
        remaining = [r for r in redemptions if r.id != redemption_id]
        if len(remaining) == len(redemptions):
            return False
        return self._save_list(STORAGE_KEYS["REDEMPTIONS"], remaining)

    # ------------------------------
    # User progress (one record per user/challenge pair)
    # ------------------------------
    def get_user_progress(self) -> List[UserProgress]:
        return self._load_list(STORAGE_KEYS["USER_PROGRESS"], UserProgress.from_dict)

    def set_user_progress(self, records: List[UserProgress]) -> bool:
        return self._save_list(STORAGE_KEYS["USER_PROGRESS"], records)

    def find_progress(self, user_id: str, challenge_id: str) -> Optional[UserProgress]:
        return next(
            (
                p
                for p in self.get_user_progress()
                if p.user_id == user_id and p.challenge_id == challenge_id
            ),
            None,
        )

    def update_user_progress(
        self, user_id: str, challenge_id: str, progress: float, now=None
    ) -> Optional[UserProgress]:
        """
        Upsert the snapshot for (user_id, challenge_id).
        Reaching 100 marks it completed; a completed record stays completed.
        Returns the stored record, or None if the write failed.
        """
        now = now or utcnow()
        records = self.get_user_progress()
        record = next(
            (p for p in records if p.user_id == user_id and p.challenge_id == challenge_id),
            None,
        )

        if record is None:
            record = UserProgress(user_id=user_id, challenge_id=challenge_id)
            records.append(record)

        record.progress = progress
        if progress >= 100 and not record.completed:
            record.completed = True
            record.completed_at = iso(now)

        if not self.set_user_progress(records):
            return None
        return record
