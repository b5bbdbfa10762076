"""
Unit tests for season detection (plantcare/services/seasonal_context.py).
"""

from datetime import date, datetime

import pytest

from plantcare.constants import SEASONS
from plantcare.services.seasonal_context import get_current_season, get_seasonal_tips


def test_seattle_in_july_is_summer():
    assert get_current_season(47.6, datetime(2024, 7, 15)) == "summer"


def test_sydney_in_july_is_winter():
    assert get_current_season(-33.9, datetime(2024, 7, 15)) == "winter"


@pytest.mark.parametrize("month,north,south", [
    (1, "winter", "summer"),
    (2, "winter", "summer"),
    (3, "spring", "autumn"),
    (5, "spring", "autumn"),
    (6, "summer", "winter"),
    (8, "summer", "winter"),
    (9, "autumn", "spring"),
    (11, "autumn", "spring"),
    (12, "winter", "summer"),
])
def test_hemispheres_mirror(month, north, south):
    when = date(2024, month, 15)
    assert get_current_season(40, when) == north
    assert get_current_season(-33, when) == south


def test_equator_counts_as_northern():
    assert get_current_season(0, date(2024, 1, 10)) == "winter"


def test_defaults_to_today():
    assert get_current_season(10) in {"spring", "summer", "autumn", "winter"}


class TestSeasonalTips:
    def test_tips_per_season(self):
        assert "Resume regular fertilizing schedule" in get_seasonal_tips("spring")
        assert "Water more frequently in heat" in get_seasonal_tips("summer")
        assert "Bring tropical plants inside before frost" in get_seasonal_tips("autumn")
        assert "Most plants need less water" in get_seasonal_tips("winter")

    def test_four_tips_each(self):
        for season in ("spring", "summer", "autumn", "winter"):
            assert len(get_seasonal_tips(season)) == 4

    def test_unknown_season(self):
        assert get_seasonal_tips("monsoon") == []


def test_southern_season_is_two_seasons_ahead():
    for month in range(1, 13):
        when = date(2024, month, 1)
        north = SEASONS.index(get_current_season(51.5, when))
        assert get_current_season(-51.5, when) == SEASONS[(north + 2) % 4]
