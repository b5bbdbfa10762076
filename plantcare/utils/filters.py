"""
Jinja2 template filters.

Keeps filter logic out of the app factory so it can be unit-tested easily.
"""

from __future__ import annotations
from datetime import date, datetime

from plantcare.services.care_reminders import format_interval, get_reminder_status


def interval_label(value):
    """Render an interval in days as "Weekly", "Every 10 days", ..."""
    try:
        return format_interval(int(value))
    except (TypeError, ValueError):
        return ""


def due_label(value):
    """Render a due date as "Due today", "2 days overdue", ..."""
    if not value:
        return "Unknown"

    if isinstance(value, str):
        try:
            # Handle ISO format (YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS)
            value = datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except (ValueError, AttributeError):
            return value[:10] if len(value) >= 10 else value
    elif not isinstance(value, date):
        return "Unknown"

    return get_reminder_status(value)["label"]
