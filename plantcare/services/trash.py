"""
Trash retention helpers for soft-deleted plants.

Deleted plants stay in the trash for TRASH_RETENTION_DAYS before a cleanup
job removes them for good. Retention is measured from the deletion timestamp,
not from calendar days.
"""

from __future__ import annotations
import math
from datetime import datetime, timedelta
from typing import Optional

from flask import current_app, has_app_context

TRASH_RETENTION_DAYS = 7

_SECONDS_PER_DAY = 24 * 60 * 60


def _retention_days() -> int:
    if has_app_context():
        return current_app.config.get("TRASH_RETENTION_DAYS", TRASH_RETENTION_DAYS)
    return TRASH_RETENTION_DAYS


def get_expiration_date(deleted_at: datetime) -> datetime:
    """When a plant deleted at deleted_at gets permanently deleted."""
    return deleted_at + timedelta(days=_retention_days())


def get_days_until_permanent_delete(deleted_at: datetime, now: Optional[datetime] = None) -> int:
    """
    Whole days left before permanent deletion (partial days round up).

    Returns 0 once the retention period has passed.
    """
    now = now or datetime.now(deleted_at.tzinfo)
    remaining = (get_expiration_date(deleted_at) - now).total_seconds()
    return max(0, math.ceil(remaining / _SECONDS_PER_DAY))


def is_expired(deleted_at: datetime, now: Optional[datetime] = None) -> bool:
    return get_days_until_permanent_delete(deleted_at, now) == 0


def format_time_until_delete(deleted_at: datetime, now: Optional[datetime] = None) -> str:
    """Display text such as "Today", "1 day" or "5 days"."""
    days = get_days_until_permanent_delete(deleted_at, now)
    if days == 0:
        return "Today"
    if days == 1:
        return "1 day"
    return f"{days} days"
