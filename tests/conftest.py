"""Shared pytest fixtures."""

import copy

import pytest

from plantcare import create_app
from plantcare.utils.cache import clear_weather_cache


OPEN_METEO_PAYLOAD = {
    "timezone": "America/Los_Angeles",
    "current": {
        "temperature_2m": 20,
        "relative_humidity_2m": 50,
        "precipitation": 0,
        "weather_code": 0,
    },
    "daily": {
        "time": ["2024-01-15", "2024-01-16", "2024-01-17"],
        "temperature_2m_max": [22, 20, 19],
        "temperature_2m_min": [12, 10, 9],
        "precipitation_sum": [0, 0, 1.5],
        "weather_code": [0, 2, 61],
    },
}


def make_weather(current=None, daily=None):
    """Weather snapshot with mild defaults; override parts per test."""
    snapshot = {
        "current": {"temperature": 20, "humidity": 50, "precipitation": 0, "weather_code": 0},
        "daily": [
            {"date": "2024-01-15", "temperature_max": 22, "temperature_min": 12,
             "precipitation_sum": 0, "weather_code": 0},
            {"date": "2024-01-16", "temperature_max": 20, "temperature_min": 10,
             "precipitation_sum": 0, "weather_code": 0},
        ],
        "timezone": "America/Los_Angeles",
    }
    if current:
        snapshot["current"].update(current)
    if daily is not None:
        snapshot["daily"] = daily
    return snapshot


@pytest.fixture(autouse=True)
def _fresh_weather_cache():
    clear_weather_cache()
    yield
    clear_weather_cache()


@pytest.fixture
def app():
    app = create_app("plantcare.config.TestConfig")
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ajax_headers():
    return {"X-Requested-With": "XMLHttpRequest"}


@pytest.fixture
def weather_factory():
    return make_weather


@pytest.fixture
def open_meteo_payload():
    return copy.deepcopy(OPEN_METEO_PAYLOAD)
