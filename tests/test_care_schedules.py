"""
Unit tests for the care schedule lifecycle (plantcare/services/care_schedules.py).
"""

from datetime import datetime

from plantcare.services import care_schedules

NOW = datetime(2024, 1, 15, 9, 30)


def _schedule(care_type="WATERING", interval_days=7, next_due=datetime(2024, 1, 20), enabled=True, plant_id="p1"):
    return {
        "plant_id": plant_id,
        "care_type": care_type,
        "interval_days": interval_days,
        "next_due_date": next_due,
        "last_cared_at": None,
        "enabled": enabled,
    }


class TestBuildSchedule:
    def test_defaults_next_due_from_now(self):
        schedule, error = care_schedules.build_schedule("p1", "fertilizing", 14, now=NOW)
        assert error is None
        assert schedule == {
            "plant_id": "p1",
            "care_type": "FERTILIZING",
            "interval_days": 14,
            "next_due_date": datetime(2024, 1, 29),
            "last_cared_at": None,
            "enabled": True,
        }

    def test_explicit_next_due_is_normalized_to_midnight(self):
        schedule, error = care_schedules.build_schedule("p1", "PRUNING", 30, next_due_date=datetime(2024, 2, 1, 17, 5))
        assert error is None
        assert schedule["next_due_date"] == datetime(2024, 2, 1)

    def test_rejects_unknown_care_type(self):
        schedule, error = care_schedules.build_schedule("p1", "MISTING", 7)
        assert schedule is None
        assert "Invalid care type" in error

    def test_rejects_interval_out_of_range(self):
        for interval in (0, 366, -3):
            schedule, error = care_schedules.build_schedule("p1", "WATERING", interval)
            assert schedule is None
            assert "between 1 and 365" in error

    def test_requires_plant(self):
        schedule, error = care_schedules.build_schedule("", "WATERING", 7)
        assert schedule is None
        assert error == "plant_id is required."


class TestRecordCare:
    def test_advances_existing_schedule(self):
        schedules = [_schedule(interval_days=10)]
        cared_at = datetime(2024, 1, 15, 18, 45)

        schedule, created = care_schedules.record_care(schedules, "p1", "WATERING", cared_at=cared_at)

        assert created is False
        assert schedule is schedules[0]
        assert schedule["last_cared_at"] == cared_at
        assert schedule["next_due_date"] == datetime(2024, 1, 25)

    def test_only_matching_care_type_is_advanced(self):
        watering = _schedule()
        fertilizing = _schedule(care_type="FERTILIZING", interval_days=30, next_due=datetime(2024, 2, 1))
        schedules = [watering, fertilizing]

        care_schedules.record_care(schedules, "p1", "FERTILIZING", cared_at=NOW)

        assert watering["next_due_date"] == datetime(2024, 1, 20)
        assert fertilizing["next_due_date"] == datetime(2024, 2, 14)

    def test_first_watering_uses_configured_default(self, app):
        app.config["DEFAULT_INTERVAL_DAYS"] = 5
        schedules = []

        with app.app_context():
            schedule, created = care_schedules.record_care(schedules, "p1", "WATERING", cared_at=NOW)

        assert created is True
        assert schedule["interval_days"] == 5

    def test_first_watering_creates_schedule_from_species(self):
        schedules = []
        schedule, created = care_schedules.record_care(
            schedules, "p1", "WATERING", cared_at=NOW, species_water_frequency="Every 2-3 weeks"
        )

        assert created is True
        assert schedules == [schedule]
        assert schedule["interval_days"] == 18
        assert schedule["next_due_date"] == datetime(2024, 2, 2)
        assert schedule["last_cared_at"] == NOW
        assert schedule["enabled"] is True

    def test_first_watering_without_species_uses_weekly(self):
        schedule, created = care_schedules.record_care([], "p1", "WATERING", cared_at=NOW)
        assert created is True
        assert schedule["interval_days"] == 7

    def test_other_care_without_schedule_changes_nothing(self):
        schedules = [_schedule()]
        schedule, created = care_schedules.record_care(schedules, "p1", "REPOTTING", cared_at=NOW)
        assert schedule is None
        assert created is False
        assert len(schedules) == 1

    def test_schedule_for_another_plant_is_not_reused(self):
        schedules = [_schedule(plant_id="p2")]
        schedule, created = care_schedules.record_care(schedules, "p1", "WATERING", cared_at=NOW)
        assert created is True
        assert len(schedules) == 2
        assert schedules[0]["next_due_date"] == datetime(2024, 1, 20)

    def test_repeat_watering_keeps_one_schedule(self):
        schedules = []
        care_schedules.record_care(schedules, "p1", "WATERING", cared_at=NOW)
        care_schedules.record_care(schedules, "p1", "WATERING", cared_at=datetime(2024, 1, 22))
        assert len(schedules) == 1
        assert schedules[0]["next_due_date"] == datetime(2024, 1, 29)


class TestFilterSchedules:
    def test_disable_schedule(self):
        schedule = care_schedules.disable_schedule(_schedule())
        assert schedule["enabled"] is False
        assert care_schedules.filter_schedules([schedule], now=NOW) == []

    def test_sorted_with_status(self):
        later = _schedule(next_due=datetime(2024, 1, 30))
        overdue = _schedule(care_type="PRUNING", next_due=datetime(2024, 1, 10))
        result = care_schedules.filter_schedules([later, overdue], now=NOW)

        assert [s["care_type"] for s in result] == ["PRUNING", "WATERING"]
        assert result[0]["status_info"]["status"] == "overdue"
        assert result[1]["status_info"]["label"] == "Due in 15 days"

    def test_status_filter(self):
        schedules = [
            _schedule(next_due=datetime(2024, 1, 15)),
            _schedule(care_type="PRUNING", next_due=datetime(2024, 1, 16)),
            _schedule(care_type="OTHER", next_due=datetime(2024, 1, 17)),
        ]
        result = care_schedules.filter_schedules(schedules, status="due-soon", now=NOW)
        assert [s["care_type"] for s in result] == ["PRUNING", "OTHER"]

    def test_due_within(self):
        schedules = [
            _schedule(next_due=datetime(2024, 1, 16)),
            _schedule(care_type="PRUNING", next_due=datetime(2024, 2, 20)),
        ]
        result = care_schedules.filter_schedules(schedules, due_within=3, now=NOW)
        assert [s["care_type"] for s in result] == ["WATERING"]

    def test_with_status_does_not_mutate(self):
        schedule = _schedule()
        care_schedules.with_status([schedule], now=NOW)
        assert "status_info" not in schedule


def test_serialize_schedule_uses_iso_dates():
    schedule = _schedule()
    schedule["last_cared_at"] = datetime(2024, 1, 13, 8, 0)
    data = care_schedules.serialize_schedule(schedule)
    assert data["next_due_date"] == "2024-01-20T00:00:00"
    assert data["last_cared_at"] == "2024-01-13T08:00:00"
    assert isinstance(schedule["next_due_date"], datetime)
