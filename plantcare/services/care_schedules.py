"""
Care schedule service.

A care schedule is one recurring obligation for one plant and one care type:

    {
        "plant_id": str,
        "care_type": "WATERING|FERTILIZING|...",
        "interval_days": int,          # 1-365
        "next_due_date": datetime,     # always midnight
        "last_cared_at": datetime | None,
        "enabled": bool,
    }

These helpers compute the rows a persistence layer writes; they do not store
anything themselves. At most one schedule exists per (plant_id, care_type).
"""

from __future__ import annotations
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from flask import current_app, has_app_context

from plantcare.constants import CARE_TYPE_WATERING
from plantcare.services.care_reminders import (
    DEFAULT_SUGGESTED_INTERVAL,
    calculate_next_due_date,
    get_reminder_status,
    suggest_interval_from_species,
)
from plantcare.utils.validation import validate_care_type, validate_interval_days

logger = logging.getLogger(__name__)

Schedule = Dict[str, Any]


def _default_interval() -> int:
    if has_app_context():
        return current_app.config.get("DEFAULT_INTERVAL_DAYS", DEFAULT_SUGGESTED_INTERVAL)
    return DEFAULT_SUGGESTED_INTERVAL


def build_schedule(
    plant_id: str,
    care_type: str,
    interval_days: int,
    next_due_date: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> Tuple[Optional[Schedule], Optional[str]]:
    """
    Build a new enabled schedule.

    Args:
        plant_id: Plant the schedule belongs to
        care_type: One of CARE_TYPES
        interval_days: Days between occurrences (1-365)
        next_due_date: Explicit first due date; defaults to now + interval
        now: Reference time (defaults to now)

    Returns:
        (schedule_dict, error_message)
    """
    if not plant_id:
        return None, "plant_id is required."

    care_type, error = validate_care_type(care_type)
    if error:
        return None, error

    interval_days, error = validate_interval_days(interval_days)
    if error:
        return None, error

    if next_due_date is None:
        next_due_date = calculate_next_due_date(now or datetime.now(), interval_days)
    else:
        next_due_date = calculate_next_due_date(next_due_date, 0)

    return {
        "plant_id": plant_id,
        "care_type": care_type,
        "interval_days": interval_days,
        "next_due_date": next_due_date,
        "last_cared_at": None,
        "enabled": True,
    }, None


def find_schedule(schedules: Iterable[Schedule], plant_id: str, care_type: str) -> Optional[Schedule]:
    """Return the schedule for (plant_id, care_type), or None."""
    for schedule in schedules:
        if schedule.get("plant_id") == plant_id and schedule.get("care_type") == care_type:
            return schedule
    return None


def record_care(
    schedules: List[Schedule],
    plant_id: str,
    care_type: str,
    cared_at: Optional[datetime] = None,
    species_water_frequency: Optional[str] = None,
) -> Tuple[Optional[Schedule], bool]:
    """
    Apply a care log to the plant's schedules.

    An existing schedule for the care type is advanced: last_cared_at becomes
    cared_at and next_due_date moves interval_days past it. A first watering
    with no schedule creates one, using the species' watering frequency when
    known. Other care types without a schedule leave schedules untouched.

    The list is updated in place so (plant_id, care_type) stays unique.

    Returns:
        (schedule_or_None, created)
    """
    cared_at = cared_at or datetime.now()
    existing = find_schedule(schedules, plant_id, care_type)

    if existing is not None:
        existing["last_cared_at"] = cared_at
        existing["next_due_date"] = calculate_next_due_date(cared_at, existing["interval_days"])
        logger.info(
            "Advanced %s schedule for plant %s to %s",
            care_type, plant_id, existing["next_due_date"].date().isoformat(),
        )
        return existing, False

    if care_type != CARE_TYPE_WATERING:
        return None, False

    interval_days = _default_interval()
    if species_water_frequency:
        interval_days = suggest_interval_from_species(species_water_frequency)

    schedule = {
        "plant_id": plant_id,
        "care_type": CARE_TYPE_WATERING,
        "interval_days": interval_days,
        "next_due_date": calculate_next_due_date(cared_at, interval_days),
        "last_cared_at": cared_at,
        "enabled": True,
    }
    schedules.append(schedule)
    logger.info("Created watering schedule for plant %s every %d days", plant_id, interval_days)
    return schedule, True


def disable_schedule(schedule: Schedule) -> Schedule:
    """Logically remove a schedule; it keeps its dates so it can be re-enabled."""
    schedule["enabled"] = False
    return schedule


def with_status(schedules: Iterable[Schedule], now: Optional[datetime] = None) -> List[Schedule]:
    """Return copies of the schedules with a computed "status_info" key."""
    return [
        {**schedule, "status_info": get_reminder_status(schedule["next_due_date"], now)}
        for schedule in schedules
    ]


def filter_schedules(
    schedules: Iterable[Schedule],
    status: Optional[str] = None,
    due_within: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[Schedule]:
    """
    Enabled schedules with status info, soonest first.

    Args:
        schedules: Candidate schedules
        status: Keep only this status (overdue, due-today, due-soon, upcoming)
        due_within: Keep only schedules due within this many days of now
        now: Reference time (defaults to now)
    """
    now = now or datetime.now()
    candidates = [s for s in schedules if s.get("enabled", True)]

    if due_within is not None:
        horizon = now + timedelta(days=due_within)
        candidates = [s for s in candidates if s["next_due_date"] <= horizon]

    candidates.sort(key=lambda s: s["next_due_date"])
    result = with_status(candidates, now)

    if status:
        result = [s for s in result if s["status_info"]["status"] == status]
    return result


def serialize_schedule(schedule: Schedule) -> Dict[str, Any]:
    """JSON-friendly copy with ISO 8601 dates."""
    data = dict(schedule)
    for key in ("next_due_date", "last_cared_at"):
        value = data.get(key)
        if isinstance(value, datetime):
            data[key] = value.isoformat()
    return data
