"""
Care reminder calculations.

Pure helpers used by the schedule service and the JSON API:
- calculate_next_due_date(care_date, interval_days): next due day at midnight
- get_reminder_status(next_due_date, now): urgency bucket + display label
- suggest_interval_from_species(text): parse a species' watering frequency
- format_interval / get_suggested_intervals / CARE_TYPE_INFO: display helpers

Notes:
- Everything here works on calendar days; time-of-day is discarded.
- Nothing here does I/O or raises on documented inputs.
"""

from __future__ import annotations
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional, Union

DateLike = Union[date, datetime]

STATUS_OVERDUE = "overdue"
STATUS_DUE_TODAY = "due-today"
STATUS_DUE_SOON = "due-soon"
STATUS_UPCOMING = "upcoming"

# Highest diff (in days) that still counts as "due soon"
DUE_SOON_MAX_DAYS = 2

DEFAULT_SUGGESTED_INTERVAL = 7

CARE_TYPE_INFO: Dict[str, Dict[str, str]] = {
    "WATERING": {"emoji": "💧", "label": "Watering"},
    "FERTILIZING": {"emoji": "🌿", "label": "Fertilizing"},
    "REPOTTING": {"emoji": "🪴", "label": "Repotting"},
    "PRUNING": {"emoji": "✂️", "label": "Pruning"},
    "PEST_TREATMENT": {"emoji": "🐛", "label": "Pest Treatment"},
    "OTHER": {"emoji": "📝", "label": "Other Care"},
}

SUGGESTED_INTERVALS: Dict[str, List[int]] = {
    "WATERING": [3, 7, 10, 14, 21],
    "FERTILIZING": [14, 21, 30, 42, 60],
    "REPOTTING": [180, 365],
    "PRUNING": [30, 60, 90, 180],
    "PEST_TREATMENT": [14, 30, 60],
}
DEFAULT_SUGGESTED_INTERVALS = [7, 14, 30]

INTERVAL_LABELS = {
    1: "Daily",
    7: "Weekly",
    14: "Every 2 weeks",
    21: "Every 3 weeks",
    30: "Monthly",
}

BADGE_VARIANTS = {
    STATUS_OVERDUE: "destructive",
    STATUS_DUE_TODAY: "secondary",
    STATUS_DUE_SOON: "default",
    STATUS_UPCOMING: "outline",
}

# Ordered (phrases, days) table. Order matters: substring checks run top to
# bottom, so "bi-weekly" must come before "weekly" and "2-3 weeks" after it.
SPECIES_FREQUENCY_PATTERNS = [
    (("daily", "every day"), 1),
    (("every other day", "every 2 days"), 2),
    (("2-3 times per week", "twice a week"), 3),
    (("every 3-4 days",), 4),
    (("every 2 weeks", "bi-weekly", "biweekly", "bi weekly"), 14),
    (("every 1-2 weeks", "1-2 weeks"), 10),
    (("weekly", "once a week", "every week"), 7),
    (("every 2-3 weeks", "2-3 weeks"), 18),
    (("every 2-4 weeks", "2-4 weeks"), 21),
    (("every 3 weeks",), 21),
    (("monthly", "once a month", "every month"), 30),
    (("every 4-6 weeks",), 35),
    (("every 6 weeks",), 42),
]


def _as_day(value: DateLike) -> date:
    return value.date() if isinstance(value, datetime) else value


def calculate_next_due_date(care_date: DateLike, interval_days: int) -> datetime:
    """
    Calculate the next due date from the date care was given.

    Args:
        care_date: When the care happened (date or datetime)
        interval_days: Days between occurrences (callers validate 1-365)

    Returns:
        Midnight of the due day. A timezone-aware care_date keeps its tzinfo.
    """
    due_day = _as_day(care_date) + timedelta(days=interval_days)
    tzinfo = care_date.tzinfo if isinstance(care_date, datetime) else None
    return datetime.combine(due_day, time.min, tzinfo=tzinfo)


def get_reminder_status(next_due_date: DateLike, now: Optional[DateLike] = None) -> Dict[str, object]:
    """
    Classify a schedule by how far away its due day is.

    Args:
        next_due_date: The schedule's next due date
        now: Reference time (defaults to the current local time)

    Returns:
        {
            "status": "overdue|due-today|due-soon|upcoming",
            "days_until_due": int,  # negative when overdue
            "label": str
        }
    """
    today = _as_day(now if now is not None else datetime.now())
    diff_days = (_as_day(next_due_date) - today).days

    if diff_days < 0:
        status = STATUS_OVERDUE
        label = "1 day overdue" if diff_days == -1 else f"{abs(diff_days)} days overdue"
    elif diff_days == 0:
        status = STATUS_DUE_TODAY
        label = "Due today"
    elif diff_days <= DUE_SOON_MAX_DAYS:
        status = STATUS_DUE_SOON
        label = "Due tomorrow" if diff_days == 1 else f"Due in {diff_days} days"
    else:
        status = STATUS_UPCOMING
        label = f"Due in {diff_days} days"

    return {"status": status, "days_until_due": diff_days, "label": label}


def get_status_badge_variant(status: str) -> str:
    """Map a reminder status to the badge style used by the UI."""
    return BADGE_VARIANTS.get(status, "outline")


def suggest_interval_from_species(water_frequency: str | None) -> int:
    """
    Turn a free-text watering frequency into a suggested interval.

    The result is only a suggestion; unknown text falls back to weekly.

    Example:
        >>> suggest_interval_from_species("Bi-weekly watering")
        14
        >>> suggest_interval_from_species("Keep soil moist")
        7
    """
    lower = (water_frequency or "").lower()
    for phrases, days in SPECIES_FREQUENCY_PATTERNS:
        if any(phrase in lower for phrase in phrases):
            return days
    return DEFAULT_SUGGESTED_INTERVAL


def format_interval(days: int) -> str:
    """Human label for an interval ("Weekly", "Every 10 days", ...)."""
    return INTERVAL_LABELS.get(days, f"Every {days} days")


def get_suggested_intervals(care_type: str | None) -> List[int]:
    """Preset interval choices for a care type."""
    return list(SUGGESTED_INTERVALS.get(care_type or "", DEFAULT_SUGGESTED_INTERVALS))
