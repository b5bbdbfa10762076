"""
Unit tests for care reminder calculations (plantcare/services/care_reminders.py).
"""

from datetime import date, datetime, timezone

import pytest

from plantcare.services import care_reminders
from plantcare.services.care_reminders import (
    calculate_next_due_date,
    format_interval,
    get_reminder_status,
    get_status_badge_variant,
    get_suggested_intervals,
    suggest_interval_from_species,
)

NOW = datetime(2024, 1, 15, 12, 0, 0)


class TestCalculateNextDueDate:
    def test_adds_interval_days(self):
        assert calculate_next_due_date(datetime(2024, 1, 15), 7) == datetime(2024, 1, 22)

    def test_month_boundary(self):
        assert calculate_next_due_date(datetime(2024, 1, 28), 7) == datetime(2024, 2, 4)

    def test_year_boundary(self):
        assert calculate_next_due_date(datetime(2024, 12, 28), 7) == datetime(2025, 1, 4)

    def test_leap_day(self):
        assert calculate_next_due_date(datetime(2024, 2, 28), 1) == datetime(2024, 2, 29)

    def test_resets_time_to_start_of_day(self):
        result = calculate_next_due_date(datetime(2024, 1, 15, 15, 30, 45, 123456), 7)
        assert (result.hour, result.minute, result.second, result.microsecond) == (0, 0, 0, 0)
        assert result.date() == date(2024, 1, 22)

    def test_accepts_plain_date(self):
        assert calculate_next_due_date(date(2024, 3, 1), 30) == datetime(2024, 3, 31)

    def test_keeps_timezone(self):
        result = calculate_next_due_date(datetime(2024, 1, 15, 23, 0, tzinfo=timezone.utc), 1)
        assert result == datetime(2024, 1, 16, tzinfo=timezone.utc)

    @pytest.mark.parametrize("interval", [1, 2, 31, 180, 365])
    def test_exact_day_count(self, interval):
        care_date = datetime(2023, 6, 10, 8, 15)
        result = calculate_next_due_date(care_date, interval)
        assert (result.date() - care_date.date()).days == interval


class TestGetReminderStatus:
    """Bucket boundaries, relative to NOW (Jan 15 2024, midday)."""

    def test_overdue(self):
        result = get_reminder_status(datetime(2024, 1, 13), now=NOW)
        assert result == {"status": "overdue", "days_until_due": -2, "label": "2 days overdue"}

    def test_one_day_overdue_is_singular(self):
        result = get_reminder_status(datetime(2024, 1, 14), now=NOW)
        assert result["status"] == "overdue"
        assert result["label"] == "1 day overdue"

    def test_due_today(self):
        result = get_reminder_status(datetime(2024, 1, 15), now=NOW)
        assert result == {"status": "due-today", "days_until_due": 0, "label": "Due today"}

    def test_due_today_ignores_time_of_day(self):
        result = get_reminder_status(datetime(2024, 1, 15, 23, 59), now=datetime(2024, 1, 15, 0, 1))
        assert result["status"] == "due-today"

    def test_due_tomorrow(self):
        result = get_reminder_status(datetime(2024, 1, 16), now=NOW)
        assert result == {"status": "due-soon", "days_until_due": 1, "label": "Due tomorrow"}

    def test_due_in_two_days(self):
        result = get_reminder_status(datetime(2024, 1, 17), now=NOW)
        assert result == {"status": "due-soon", "days_until_due": 2, "label": "Due in 2 days"}

    def test_upcoming_from_three_days(self):
        result = get_reminder_status(datetime(2024, 1, 18), now=NOW)
        assert result == {"status": "upcoming", "days_until_due": 3, "label": "Due in 3 days"}

    def test_upcoming_further_out(self):
        result = get_reminder_status(date(2024, 1, 20), now=NOW)
        assert result["status"] == "upcoming"
        assert result["label"] == "Due in 5 days"

    def test_defaults_to_current_time(self):
        assert get_reminder_status(datetime.now())["status"] == "due-today"


class TestStatusBadgeVariant:
    @pytest.mark.parametrize("status,variant", [
        ("overdue", "destructive"),
        ("due-today", "secondary"),
        ("due-soon", "default"),
        ("upcoming", "outline"),
    ])
    def test_variants(self, status, variant):
        assert get_status_badge_variant(status) == variant


class TestSuggestIntervalFromSpecies:
    def test_daily(self):
        assert suggest_interval_from_species("Daily, keep soil moist") == 1
        assert suggest_interval_from_species("Water every day") == 1

    def test_every_other_day(self):
        assert suggest_interval_from_species("Every other day in summer") == 2

    def test_twice_a_week(self):
        assert suggest_interval_from_species("Twice a week") == 3

    def test_every_three_to_four_days(self):
        assert suggest_interval_from_species("Every 3-4 days") == 4

    def test_weekly(self):
        assert suggest_interval_from_species("Weekly, when top inch is dry") == 7
        assert suggest_interval_from_species("Once a week") == 7
        assert suggest_interval_from_species("Every week") == 7

    def test_bi_weekly_beats_weekly(self):
        assert suggest_interval_from_species("Every 2 weeks") == 14
        assert suggest_interval_from_species("Bi-weekly watering") == 14
        assert suggest_interval_from_species("biweekly") == 14

    def test_one_to_two_weeks(self):
        assert suggest_interval_from_species("Every 1-2 weeks") == 10

    def test_two_to_three_weeks_not_twenty_one(self):
        assert suggest_interval_from_species("Every 2-3 weeks") == 18

    def test_two_to_four_weeks(self):
        assert suggest_interval_from_species("Water every 2-4 weeks") == 21

    def test_monthly(self):
        assert suggest_interval_from_species("Monthly during growing season") == 30
        assert suggest_interval_from_species("Once a month") == 30

    def test_six_weeks(self):
        assert suggest_interval_from_species("Every 6 weeks in winter") == 42

    def test_default_for_unknown_text(self):
        assert suggest_interval_from_species("Keep soil moist") == 7
        assert suggest_interval_from_species("As needed") == 7
        assert suggest_interval_from_species("") == 7
        assert suggest_interval_from_species(None) == 7

    def test_case_insensitive(self):
        assert suggest_interval_from_species("WEEKLY") == 7
        assert suggest_interval_from_species("MONTHLY") == 30


class TestFormatInterval:
    @pytest.mark.parametrize("days,label", [
        (1, "Daily"),
        (7, "Weekly"),
        (14, "Every 2 weeks"),
        (21, "Every 3 weeks"),
        (30, "Monthly"),
    ])
    def test_special_cases(self, days, label):
        assert format_interval(days) == label

    @pytest.mark.parametrize("days", [2, 3, 10, 28, 35, 60, 365])
    def test_fallback(self, days):
        assert format_interval(days) == f"Every {days} days"


class TestSuggestedIntervals:
    def test_watering_presets(self):
        assert get_suggested_intervals("WATERING") == [3, 7, 10, 14, 21]

    def test_fertilizing_presets(self):
        assert get_suggested_intervals("FERTILIZING") == [14, 21, 30, 42, 60]

    def test_rare_types(self):
        assert get_suggested_intervals("REPOTTING") == [180, 365]
        assert get_suggested_intervals("PRUNING") == [30, 60, 90, 180]
        assert get_suggested_intervals("PEST_TREATMENT") == [14, 30, 60]

    def test_unknown_type(self):
        assert get_suggested_intervals("OTHER") == [7, 14, 30]
        assert get_suggested_intervals("MISTING") == [7, 14, 30]

    def test_returns_copy(self):
        get_suggested_intervals("WATERING").append(99)
        assert 99 not in care_reminders.SUGGESTED_INTERVALS["WATERING"]

    def test_care_type_info_covers_all_types(self):
        assert set(care_reminders.CARE_TYPE_INFO) == {
            "WATERING", "FERTILIZING", "REPOTTING", "PRUNING", "PEST_TREATMENT", "OTHER",
        }
        assert care_reminders.CARE_TYPE_INFO["PEST_TREATMENT"]["label"] == "Pest Treatment"
