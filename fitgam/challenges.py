# fitgam/challenges.py
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from .models.social import Challenge, UserProgress
from .models.user import User
from .models.workout import Workout
from .utils import calendar_day


def workouts_in_window(challenge: Challenge, workouts: Iterable[Workout]) -> List[Workout]:
    """Workouts dated inside [start_date, end_date], compared by calendar day."""
    start = calendar_day(challenge.start_date)
    end = calendar_day(challenge.end_date)
    if start is None or end is None:
        return []

    relevant = []
    for w in workouts:
        day = calendar_day(w.date)
        if day is not None and start <= day <= end:
            relevant.append(w)
    return relevant


def aggregate(challenge_type: str, workouts: List[Workout]) -> float:
    if challenge_type == "frequency":
        return len(workouts)
    if challenge_type == "duration":
        return sum(w.duration for w in workouts)
    if challenge_type == "distance":
        return sum(w.distance or 0 for w in workouts)
    if challenge_type == "calories":
        return sum(w.calories_burned for w in workouts)
    return 0


def calculate_challenge_progress(
    user: User,
    challenge: Challenge,
    workouts: Iterable[Workout],
    existing: Optional[UserProgress] = None,
) -> float:
    """
    Percentage completion in [0, 100].

    A stored record already marked completed wins, even if the workouts
    behind it were deleted since. A non-positive target counts as done.
    """
    if existing is not None and existing.completed:
        return 100.0

    if challenge.target is None or challenge.target <= 0:
        return 100.0

    own = [w for w in workouts if w.user_id == user.id]
    total = aggregate(challenge.type, workouts_in_window(challenge, own))
    return min(100.0, 100.0 * total / challenge.target)


def is_running(challenge: Challenge, now: datetime) -> bool:
    end = calendar_day(challenge.end_date)
    return bool(challenge.is_active) and end is not None and end >= now.date()


def group_challenges(
    user: User,
    challenges: List[Challenge],
    workouts: List[Workout],
    progress_records: List[UserProgress],
    now: datetime,
) -> Dict[str, List[Dict]]:
    """
    Split challenges into available / joined / completed for one user,
    each entry carrying its computed progress.
    """
    by_challenge = {
        p.challenge_id: p for p in progress_records if p.user_id == user.id
    }

    grouped: Dict[str, List[Dict]] = {"available": [], "joined": [], "completed": []}

    for challenge in challenges:
        progress = calculate_challenge_progress(
            user, challenge, workouts, by_challenge.get(challenge.id)
        )
        has_joined = user.id in challenge.participants
        running = is_running(challenge, now)

        entry = challenge_payload(challenge, progress, has_joined)

        if has_joined and progress >= 100:
            grouped["completed"].append(entry)
        elif running and has_joined:
            grouped["joined"].append(entry)
        elif running and progress < 100:
            grouped["available"].append(entry)

    return grouped


def challenge_payload(challenge: Challenge, progress: float, has_joined: bool) -> Dict:
    data = challenge.to_dict()
    data["participant_count"] = len(challenge.participants)
    data["progress"] = round(progress, 2)
    data["has_joined"] = has_joined
    return data
