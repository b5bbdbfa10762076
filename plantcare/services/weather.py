"""
Weather service helpers (Open-Meteo).

Functions:
- fetch_weather(lat, lon): current conditions + 7-day daily forecast.
- get_weather_description(code) / get_weather_icon(code): WMO code display.
- get_weather_alerts(weather, has_outdoor_plants): frost, heat, heavy rain
  and low humidity alerts for tomorrow's forecast and current conditions.

Snapshot shape returned by fetch_weather and consumed everywhere else:

    {
        "current": {"temperature", "humidity", "precipitation", "weather_code"},
        "daily": [{"date", "temperature_max", "temperature_min",
                   "precipitation_sum", "weather_code"}, ...],
        "timezone": "Europe/Berlin",
    }

Notes:
- Metric units throughout (°C, mm, % relative humidity).
- fetch_weather is best-effort: failures are logged and return None so the
  caller can answer with an error instead of crashing.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import requests
from flask import current_app, has_app_context

from plantcare.utils.cache import cache_weather_data

logger = logging.getLogger(__name__)

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"
DEFAULT_TIMEOUT = 8
FORECAST_DAYS = 7

CURRENT_FIELDS = "temperature_2m,relative_humidity_2m,precipitation,weather_code"
DAILY_FIELDS = "temperature_2m_max,temperature_2m_min,precipitation_sum,weather_code"

# Alert thresholds (°C / mm / %)
FROST_WARNING_C = 5
FROST_CRITICAL_C = 0
HEATWAVE_WARNING_C = 35
HEATWAVE_CRITICAL_C = 40
HEAVY_RAIN_WARNING_MM = 20
HEAVY_RAIN_CRITICAL_MM = 50
LOW_HUMIDITY_PERCENT = 30

# WMO weather interpretation codes used by Open-Meteo
WEATHER_CODE_DESCRIPTIONS = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


def _get_config(key: str, default: Any) -> Any:
    """Read an app config value, falling back outside an app context."""
    if has_app_context():
        return current_app.config.get(key, default)
    return default


def get_weather_description(code: int) -> str:
    return WEATHER_CODE_DESCRIPTIONS.get(code, "Unknown")


def get_weather_icon(code: int) -> str:
    if code in (0, 1): return "☀️"
    if code == 2: return "⛅"
    if code == 3: return "☁️"
    if 45 <= code <= 48: return "🌫️"
    if 51 <= code <= 57: return "🌧️"
    if 61 <= code <= 67: return "🌧️"
    if 71 <= code <= 77: return "❄️"
    if 80 <= code <= 82: return "🌦️"
    if 85 <= code <= 86: return "🌨️"
    if code >= 95: return "⛈️"
    return "🌡️"


def parse_open_meteo_response(data: Any) -> Optional[Dict[str, Any]]:
    """
    Convert an Open-Meteo forecast payload into a weather snapshot.

    Returns None if the current/daily/timezone blocks are missing or the
    current/daily blocks are not objects.
    """
    if not isinstance(data, dict) or not all(k in data for k in ("current", "daily", "timezone")):
        return None

    current = data["current"] or {}
    daily = data["daily"] or {}
    if not isinstance(current, dict) or not isinstance(daily, dict):
        return None
    dates = daily.get("time") or []
    maxes = daily.get("temperature_2m_max") or []
    mins = daily.get("temperature_2m_min") or []
    precip = daily.get("precipitation_sum") or []
    codes = daily.get("weather_code") or []

    def _at(values: List[Any], i: int) -> Any:
        return values[i] if i < len(values) else None

    return {
        "current": {
            "temperature": current.get("temperature_2m"),
            "humidity": current.get("relative_humidity_2m"),
            "precipitation": current.get("precipitation"),
            "weather_code": current.get("weather_code"),
        },
        "daily": [
            {
                "date": day,
                "temperature_max": _at(maxes, i),
                "temperature_min": _at(mins, i),
                "precipitation_sum": _at(precip, i),
                "weather_code": _at(codes, i),
            }
            for i, day in enumerate(dates)
        ],
        "timezone": data["timezone"],
    }


@cache_weather_data
def fetch_weather(latitude: float, longitude: float) -> Optional[Dict[str, Any]]:
    """
    Fetch current weather and the daily forecast for a location.

    Args:
        latitude: Location latitude
        longitude: Location longitude

    Returns:
        Weather snapshot dict, or None on network/HTTP/payload errors
    """
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "current": CURRENT_FIELDS,
        "daily": DAILY_FIELDS,
        "timezone": "auto",
        "forecast_days": _get_config("WEATHER_FORECAST_DAYS", FORECAST_DAYS),
    }
    url = _get_config("OPEN_METEO_BASE_URL", OPEN_METEO_URL)
    timeout = _get_config("WEATHER_REQUEST_TIMEOUT", DEFAULT_TIMEOUT)

    try:
        r = requests.get(url, params=params, timeout=timeout)
        r.raise_for_status()
        data = r.json()
    except requests.RequestException as e:
        logger.warning("Weather fetch failed for (%s, %s): %s", latitude, longitude, e)
        return None
    except ValueError as e:
        logger.warning("Weather API returned invalid JSON: %s", e)
        return None

    snapshot = parse_open_meteo_response(data)
    if snapshot is None:
        logger.warning("Invalid weather data structure from API for (%s, %s)", latitude, longitude)
    return snapshot


def get_weather_alerts(weather: Dict[str, Any], has_outdoor_plants: bool) -> List[Dict[str, str]]:
    """
    Derive plant-care alerts from a weather snapshot.

    Checks are independent, so one snapshot can raise several alerts:
    - frost: tomorrow's low under 5°C (critical under 0°C)
    - heatwave: tomorrow's high over 35°C (critical over 40°C)
    - heavy-rain: tomorrow over 20mm, outdoor plants only (critical over 50mm)
    - low-humidity: current humidity under 30% (always a warning)
    """
    alerts: List[Dict[str, str]] = []
    daily = weather.get("daily") or []
    tomorrow = daily[1] if len(daily) > 1 else None

    if tomorrow:
        temp_min = tomorrow.get("temperature_min")
        temp_max = tomorrow.get("temperature_max")
        precip = tomorrow.get("precipitation_sum")

        if temp_min is not None and temp_min < FROST_WARNING_C:
            is_freezing = temp_min < FROST_CRITICAL_C
            alerts.append({
                "type": "frost",
                "severity": "critical" if is_freezing else "warning",
                "title": "Frost Warning",
                "message": (
                    f"Freezing temperatures expected ({temp_min}°C). Move outdoor plants inside immediately."
                    if is_freezing else
                    f"Cold temperatures expected ({temp_min}°C). Consider protecting sensitive plants."
                ),
                "icon": "❄️",
            })

        if temp_max is not None and temp_max > HEATWAVE_WARNING_C:
            alerts.append({
                "type": "heatwave",
                "severity": "critical" if temp_max > HEATWAVE_CRITICAL_C else "warning",
                "title": "Heatwave Alert",
                "message": f"High temperatures expected ({temp_max}°C). Increase watering and provide shade for plants.",
                "icon": "🔥",
            })

        if has_outdoor_plants and precip is not None and precip > HEAVY_RAIN_WARNING_MM:
            alerts.append({
                "type": "heavy-rain",
                "severity": "critical" if precip > HEAVY_RAIN_CRITICAL_MM else "warning",
                "title": "Heavy Rain Expected",
                "message": f"{precip}mm of rain expected. Skip watering outdoor plants.",
                "icon": "🌧️",
            })

    humidity = (weather.get("current") or {}).get("humidity")
    if humidity is not None and humidity < LOW_HUMIDITY_PERCENT:
        alerts.append({
            "type": "low-humidity",
            "severity": "warning",
            "title": "Low Humidity",
            "message": f"Current humidity is {humidity}%. Consider misting tropical plants.",
            "icon": "💨",
        })

    return alerts
