"""
Input validation and normalization for the JSON API.

Each validator returns (value, error_message). On success error_message is
None; on failure value is None and the message is safe to show to users.
The core services assume their inputs already passed through here.
"""

from __future__ import annotations
from datetime import date, datetime
from typing import Any, Optional, Tuple

from flask import current_app, has_app_context

from plantcare.constants import CARE_TYPES, PLANT_LOCATIONS

MIN_INTERVAL_DAYS = 1
MAX_INTERVAL_DAYS = 365

LOCATION_CHOICES = {loc[0] for loc in PLANT_LOCATIONS}


def _get_config(key: str, default: Any) -> Any:
    if has_app_context():
        return current_app.config.get(key, default)
    return default


def validate_care_type(value: Any) -> Tuple[Optional[str], Optional[str]]:
    """Accept one of CARE_TYPES (case-insensitive)."""
    care_type = str(value or "").strip().upper()
    if care_type not in CARE_TYPES:
        return None, f"Invalid care type. Must be one of: {', '.join(CARE_TYPES)}"
    return care_type, None


def validate_interval_days(value: Any) -> Tuple[Optional[int], Optional[str]]:
    """
    Validate an interval in days.

    Accepts ints and integer-valued strings; rejects bools and fractions.
    Bounds come from MIN_INTERVAL_DAYS / MAX_INTERVAL_DAYS (1-365 by default).
    """
    if isinstance(value, bool):
        return None, "Interval must be a whole number of days."
    try:
        if isinstance(value, float):
            if not value.is_integer():
                return None, "Interval must be a whole number of days."
            interval = int(value)
        else:
            interval = int(str(value).strip())
    except (ValueError, TypeError):
        return None, "Interval must be a whole number of days."

    min_days = _get_config("MIN_INTERVAL_DAYS", MIN_INTERVAL_DAYS)
    max_days = _get_config("MAX_INTERVAL_DAYS", MAX_INTERVAL_DAYS)
    if interval < min_days or interval > max_days:
        return None, f"Interval must be between {min_days} and {max_days} days."
    return interval, None


def parse_date_param(value: Any, field: str = "date") -> Tuple[Optional[datetime], Optional[str]]:
    """
    Parse an ISO date or datetime (YYYY-MM-DD or full ISO 8601, "Z" allowed).

    Returns a datetime; plain dates become midnight.
    """
    if isinstance(value, datetime):
        return value, None
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day), None
    if not value or not isinstance(value, str):
        return None, f"{field} is required."
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00")), None
    except ValueError:
        return None, f"{field} must be an ISO 8601 date."


def parse_coordinates(lat: Any, lon: Any) -> Tuple[Optional[Tuple[float, float]], Optional[str]]:
    """Validate a latitude/longitude pair."""
    try:
        latitude = float(lat)
        longitude = float(lon)
    except (ValueError, TypeError):
        return None, "lat and lon are required numbers."
    if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
        return None, "lat must be within ±90 and lon within ±180."
    return (latitude, longitude), None


def normalize_location(value: str | None) -> str:
    """Coerce unknown/missing locations to INDOOR."""
    v = (value or "").strip().upper()
    return v if v in LOCATION_CHOICES else "INDOOR"


def parse_bool(value: Any) -> bool:
    """Query-string friendly truthiness ("1", "true", "yes", "on")."""
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}
