# fitgam/validation.py
"""
Input checks for signup, profile, workout and challenge payloads.

Each validator returns (clean_data, errors); errors maps field name to a
message and is empty when the payload is accepted.
"""
import math
import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from .models.social import CHALLENGE_TYPES
from .models.workout import WORKOUT_TYPES

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

Errors = Dict[str, str]


class ValidationError(Exception):
    def __init__(self, errors: Errors, message: str = "validation failed"):
        super().__init__(message)
        self.message = message
        self.errors = errors


def _number(data: Dict[str, Any], key: str, errors: Errors, *, lo: float, hi: float,
            msg: str, integer: bool = False) -> Optional[float]:
    raw = data.get(key)
    if raw is None or raw == "" or isinstance(raw, bool):
        errors[key] = msg
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        errors[key] = msg
        return None
    if not math.isfinite(value) or value < lo or value > hi:
        errors[key] = msg
        return None
    if integer:
        # 30.0 is fine, 30.9 is not
        if not value.is_integer():
            errors[key] = msg
            return None
        return int(value)
    return value


def _string_list(data: Dict[str, Any], key: str, errors: Errors, msg: str) -> List[str]:
    raw = data.get(key)
    if not isinstance(raw, list) or not raw or not all(isinstance(x, str) for x in raw):
        errors[key] = msg
        return []
    return [x.strip() for x in raw if x.strip()]


def _parse_iso(raw: str) -> bool:
    for parse in (date.fromisoformat, datetime.fromisoformat):
        try:
            parse(raw)
            return True
        except ValueError:
            continue
    return False


def _date_string(data: Dict[str, Any], key: str, errors: Errors) -> Optional[str]:
    """The whole string must be an ISO date or datetime, not just its prefix."""
    raw = data.get(key)
    if not isinstance(raw, str) or not _parse_iso(raw.strip()):
        errors[key] = f"invalid {key}"
        return None
    return raw.strip()


# ------------------------------
# Signup / login / profile
# ------------------------------
def validate_signup(data: Dict[str, Any]) -> Tuple[Dict[str, Any], Errors]:
    errors: Errors = {}
    clean: Dict[str, Any] = {}

    name = (data.get("name") or "").strip()
    if len(name) < 2:
        errors["name"] = "Name must be at least 2 characters"
    clean["name"] = name

    email = (data.get("email") or "").strip().lower()
    if not EMAIL_RE.match(email):
        errors["email"] = "Please enter a valid email address"
    clean["email"] = email

    password = data.get("password") or ""  # do NOT strip passwords
    if len(password) < 6:
        errors["password"] = "Password must be at least 6 characters"
    confirm = data.get("confirm_password")
    if confirm is not None and confirm != password:
        errors["confirm_password"] = "Passwords don't match"
    clean["password"] = password

    clean.update(_profile_numbers(data, errors, required=True))

    clean["fitness_goals"] = _string_list(
        data, "fitness_goals", errors, "Please select at least one fitness goal"
    )
    clean["activity_preferences"] = _string_list(
        data, "activity_preferences", errors,
        "Please select at least one activity preference",
    )
    clean["profile_picture"] = data.get("profile_picture") or None

    return clean, errors


def _profile_numbers(data: Dict[str, Any], errors: Errors, required: bool) -> Dict[str, Any]:
    limits = {
        "age": (13, 120, "Must be between 13 and 120 years old", True),
        "weight": (30, 500, "Please enter a valid weight", False),
        "height": (100, 250, "Please enter a valid height", False),
    }
    clean = {}
    for key, (lo, hi, msg, integer) in limits.items():
        if not required and data.get(key) is None:
            continue
        value = _number(data, key, errors, lo=lo, hi=hi, msg=msg, integer=integer)
        if value is not None:
            clean[key] = value
    return clean


def validate_login(data: Dict[str, Any]) -> Tuple[Dict[str, Any], Errors]:
    errors: Errors = {}
    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""
    if not email:
        errors["email"] = "email is required"
    if not password:
        errors["password"] = "password is required"
    return {"email": email, "password": password}, errors


def validate_profile_update(data: Dict[str, Any]) -> Tuple[Dict[str, Any], Errors]:
    """Only profile attributes; stats and points are never writable here."""
    errors: Errors = {}
    clean: Dict[str, Any] = {}

    if "name" in data:
        name = (data.get("name") or "").strip()
        if len(name) < 2:
            errors["name"] = "Name must be at least 2 characters"
        else:
            clean["name"] = name

    if "profile_picture" in data:
        clean["profile_picture"] = data.get("profile_picture") or None

    clean.update(_profile_numbers(data, errors, required=False))

    for key, msg in (
        ("fitness_goals", "Please select at least one fitness goal"),
        ("activity_preferences", "Please select at least one activity preference"),
    ):
        if key in data:
            values = _string_list(data, key, errors, msg)
            if key not in errors:
                clean[key] = values

    return clean, errors


# ------------------------------
# Workouts
# ------------------------------
def validate_workout(data: Dict[str, Any], partial: bool = False) -> Tuple[Dict[str, Any], Errors]:
    errors: Errors = {}
    clean: Dict[str, Any] = {}

    def wanted(key: str) -> bool:
        return not partial or key in data

    if wanted("type"):
        wtype = data.get("type")
        if wtype not in WORKOUT_TYPES:
            errors["type"] = "Please select a workout type"
        else:
            clean["type"] = wtype

    if wanted("duration"):
        value = _number(data, "duration", errors, lo=1, hi=600, integer=True,
                        msg="Duration must be between 1 and 600 minutes")
        if value is not None:
            clean["duration"] = value

    if wanted("calories_burned"):
        value = _number(data, "calories_burned", errors, lo=1, hi=5000, integer=True,
                        msg="Calories must be between 1 and 5000")
        if value is not None:
            clean["calories_burned"] = value

    if wanted("intensity_level"):
        value = _number(data, "intensity_level", errors, lo=1, hi=5, integer=True,
                        msg="Intensity must be between 1 and 5")
        if value is not None:
            clean["intensity_level"] = value

    if "distance" in data:
        raw = data.get("distance")
        if raw is None or raw == "":
            clean["distance"] = None
        else:
            value = _number(data, "distance", errors, lo=0, hi=1000,
                            msg="Distance must be between 0 and 1000 km")
            if value is not None:
                clean["distance"] = value

    if wanted("date"):
        day = _date_string(data, "date", errors)
        if day is not None:
            clean["date"] = day

    return clean, errors


# ------------------------------
# Challenges
# ------------------------------
def validate_challenge(data: Dict[str, Any], now: datetime) -> Tuple[Dict[str, Any], Errors]:
    errors: Errors = {}
    clean: Dict[str, Any] = {}

    title = (data.get("title") or "").strip()
    if len(title) < 3:
        errors["title"] = "Title must be at least 3 characters"
    clean["title"] = title
    clean["description"] = (data.get("description") or "").strip()

    ctype = data.get("type")
    if ctype not in CHALLENGE_TYPES:
        errors["type"] = f"type must be one of {', '.join(CHALLENGE_TYPES)}"
    clean["type"] = ctype

    target = _number(data, "target", errors, lo=0, hi=1_000_000,
                     msg="target must be a positive number")
    if target is not None and target <= 0:
        errors["target"] = "target must be a positive number"
    clean["target"] = target

    bonus = _number(data, "bonus_points", errors, lo=0, hi=100_000, integer=True,
                    msg="bonus_points must be between 0 and 100000")
    clean["bonus_points"] = bonus

    duration = _number(data, "duration", errors, lo=1, hi=365, integer=True,
                       msg="duration must be between 1 and 365 days")
    clean["duration"] = duration

    if data.get("start_date") is not None:
        start = _date_string(data, "start_date", errors)
        clean["start_date"] = start
    else:
        clean["start_date"] = None

    if not errors and clean["start_date"] is None:
        clean["start_date"] = now.isoformat()

    return clean, errors
