# fitgam/gamification.py
"""
Points, levels, streaks and badges.

Everything here is a pure function over User / Workout values: callers
get back a new User and the notifications to persist, nothing is written.
"""
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple
from uuid import uuid4

from .models.notification import Notification
from .models.user import Badge, User
from .models.workout import Workout
from .utils import calendar_day, iso, utcnow

LEVEL_STEP_POINTS = 1000
MIN_WORKOUT_POINTS = 10
DISTANCE_BONUS_TYPES = ("running", "cycling", "walking")


# ------------------------------
# Scoring
# ------------------------------
def score_workout(workout: Workout) -> int:
    points = int(workout.duration)                    # 1 point per minute
    points += int(workout.intensity_level) * 10
    points += int(workout.calories_burned) // 10

    if workout.distance and workout.type in DISTANCE_BONUS_TYPES:
        points += int(workout.distance * 10)          # 10 points per km

    return max(points, MIN_WORKOUT_POINTS)


def calculate_level(points: int) -> int:
    points = int(points or 0)
    return max(1, (points // LEVEL_STEP_POINTS) + 1)


def points_for_next_level(points: int) -> int:
    """Points still missing to reach the next level."""
    return calculate_level(points) * LEVEL_STEP_POINTS - int(points or 0)


# ------------------------------
# Badges
# ------------------------------
@dataclass(frozen=True)
class BadgeRule:
    id: str
    name: str
    description: str
    icon: str
    requirement: str
    category: str
    condition: Callable[[User], bool]

    def build(self, earned_at: str) -> Badge:
        return Badge(
            id=self.id,
            name=self.name,
            description=self.description,
            icon=self.icon,
            requirement=self.requirement,
            earned_at=earned_at,
            category=self.category,
        )


# evaluated in this order
BADGE_RULES: Tuple[BadgeRule, ...] = (
    BadgeRule("streak_7", "Week Warrior", "Complete 7 days in a row", "🔥",
              "7-day workout streak", "streak", lambda u: u.workout_streak >= 7),
    BadgeRule("streak_30", "Monthly Master", "Complete 30 days in a row", "🏆",
              "30-day workout streak", "streak", lambda u: u.workout_streak >= 30),
    BadgeRule("workouts_10", "Getting Started", "Complete 10 workouts", "💪",
              "10 total workouts", "milestone", lambda u: u.total_workouts >= 10),
    BadgeRule("workouts_50", "Fitness Enthusiast", "Complete 50 workouts", "🌟",
              "50 total workouts", "milestone", lambda u: u.total_workouts >= 50),
    BadgeRule("workouts_100", "Fitness Beast", "Complete 100 workouts", "🦁",
              "100 total workouts", "milestone", lambda u: u.total_workouts >= 100),
    BadgeRule("calories_10000", "Calorie Crusher", "Burn 10,000 calories", "🔥",
              "10,000 calories burned", "milestone",
              lambda u: u.total_calories_burned >= 10000),
    BadgeRule("points_1000", "Point Master", "Earn 1,000 points", "💎",
              "1,000 points earned", "milestone", lambda u: u.points >= 1000),
    BadgeRule("level_5", "Rising Star", "Reach level 5", "⭐",
              "Reach level 5", "milestone", lambda u: calculate_level(u.points) >= 5),
    BadgeRule("level_10", "Elite Athlete", "Reach level 10", "👑",
              "Reach level 10", "milestone", lambda u: calculate_level(u.points) >= 10),
)

# workout type -> (badge name, icon)
FIRST_WORKOUT_BADGES = {
    "running": ("First Run", "🏃"),
    "cycling": ("First Ride", "🚴"),
    "gym": ("First Lift", "🏋️"),
    "yoga": ("First Flow", "🧘"),
    "swimming": ("First Swim", "🏊"),
    "walking": ("First Walk", "🚶"),
    "basketball": ("First Game", "⛹️"),
    "football": ("First Match", "⚽"),
    "tennis": ("First Set", "🎾"),
}


def check_and_award_badges(
    user: User, workout: Optional[Workout] = None, now: Optional[datetime] = None
) -> List[Badge]:
    """
    Badges the user qualifies for but does not own yet.
    Never returns an id already in user.badges.
    """
    earned_at = iso(now or utcnow())
    owned = set(user.badge_ids())
    new_badges: List[Badge] = []

    for rule in BADGE_RULES:
        if rule.id in owned:
            continue
        if rule.condition(user):
            new_badges.append(rule.build(earned_at))
            owned.add(rule.id)

    if workout is not None:
        badge_id = f"first_{workout.type}"
        mapped = FIRST_WORKOUT_BADGES.get(workout.type)
        if mapped and badge_id not in owned:
            name, icon = mapped
            new_badges.append(
                Badge(
                    id=badge_id,
                    name=name,
                    description=f"Complete your first {workout.type} workout",
                    icon=icon,
                    requirement=f"First {workout.type} workout",
                    earned_at=earned_at,
                    category="milestone",
                )
            )

    return new_badges


# ------------------------------
# Notifications
# ------------------------------
def _notification(user_id: str, kind: str, prefix: str, title: str, message: str,
                  now: datetime) -> Notification:
    return Notification(
        id=f"{prefix}_{uuid4().hex[:12]}",
        user_id=user_id,
        type=kind,
        title=title,
        message=message,
        created_at=iso(now),
        is_read=False,
    )


def level_up_notification(user: User, now: datetime) -> Notification:
    return _notification(
        user.id, "badge_earned", "level_up", "Level Up!",
        f"Congratulations! You've reached level {user.level}!", now,
    )


# ------------------------------
# Streaks
# ------------------------------
def next_streak(user: User, workout: Workout, now: datetime) -> Tuple[int, bool]:
    """
    Returns (new_streak, was_reset).

    A prior workout yesterday (or none at all) extends the streak, a prior
    workout on any other day than the logged one restarts it at 1, and a
    second workout on the same day leaves it alone.
    """
    workout_day = calendar_day(workout.date)
    last_day = calendar_day(user.last_workout_date)
    yesterday = now.date() - timedelta(days=1)

    if last_day is None or last_day == yesterday:
        return user.workout_streak + 1, False
    if last_day != workout_day:
        return 1, user.workout_streak > 0
    return user.workout_streak, False


# ------------------------------
# Applying a workout
# ------------------------------
def apply_workout(
    user: User, workout: Workout, now: Optional[datetime] = None
) -> Tuple[User, List[Notification]]:
    """
    Fold one logged workout into the user's stats.

    Returns the updated user and, in order, the streak-reset, badge and
    level-up notifications it produced.
    """
    now = now or utcnow()
    events: List[Notification] = []

    points = score_workout(workout)
    streak, was_reset = next_streak(user, workout, now)

    if was_reset:
        events.append(
            _notification(
                user.id, "streak_warning", "streak_reset", "Streak Reset",
                f"Your {user.workout_streak}-day streak has been reset. "
                "Start a new one today!",
                now,
            )
        )

    new_points = user.points + points
    updated = replace(
        user,
        points=new_points,
        level=calculate_level(new_points),
        workout_streak=streak,
        last_workout_date=workout.date,
        total_workouts=user.total_workouts + 1,
        total_calories_burned=user.total_calories_burned + workout.calories_burned,
    )

    new_badges = check_and_award_badges(updated, workout, now)
    updated.badges = list(user.badges) + new_badges

    for badge in new_badges:
        events.append(
            _notification(
                user.id, "badge_earned", f"badge_{badge.id}", "New Badge Earned!",
                f'You\'ve earned the "{badge.name}" badge!', now,
            )
        )

    if updated.level > user.level:
        events.append(level_up_notification(updated, now))

    return updated, events


def award_bonus_points(
    user: User, points: int, now: Optional[datetime] = None
) -> Tuple[User, List[Notification]]:
    now = now or utcnow()
    new_points = user.points + max(0, int(points))
    updated = replace(user, points=new_points, level=calculate_level(new_points))

    events = []
    if updated.level > user.level:
        events.append(level_up_notification(updated, now))
    return updated, events


def spend_points(user: User, points: int) -> User:
    """Reward redemption is the only path that lowers points."""
    new_points = max(0, user.points - int(points))
    return replace(user, points=new_points, level=calculate_level(new_points))
