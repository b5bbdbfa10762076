"""
Reminder Adjustment Engine - Weather-aware interval suggestions.

Nudges a care interval up or down from current conditions, the short-range
forecast and the season, and explains why. Also decides whether today is a
reasonable day for outdoor care work.

Signals (outdoor plants, additive):
1. Rain forecast over the next 2 days  -> +2
2. High current humidity               -> +1
3. High current temperature            -> -1
4. Winter season                       -> +3
5. Summer heat                         -> -1

Indoor plants ignore weather; only winter dormancy stretches their interval.
"""

from __future__ import annotations
import math
from typing import Any, Dict, List, Optional

# Outdoor thresholds
RAIN_LOOKAHEAD_DAYS = 2
RAIN_THRESHOLD_MM = 10
HIGH_HUMIDITY_PERCENT = 70
HIGH_TEMPERATURE_C = 35
SUMMER_HEAT_C = 30

# Day adjustments
ADJUST_RAIN = 2
ADJUST_HUMIDITY = 1
ADJUST_HEAT = -1
ADJUST_WINTER = 3
ADJUST_SUMMER_HEAT = -1

INDOOR_WINTER_MULTIPLIER = 1.3
MIN_INTERVAL = 1

# Outdoor care day thresholds
OUTDOOR_RAIN_LIMIT_MM = 5
OUTDOOR_COLD_LIMIT_C = 5
OUTDOOR_HEAT_LIMIT_C = 38
STORM_WEATHER_CODE = 95


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def adjust_interval_for_weather(
    base_interval: int,
    weather: Dict[str, Any],
    is_indoor: bool,
    season: str,
) -> Dict[str, Any]:
    """
    Suggest an interval adjusted for weather and season.

    Args:
        base_interval: The schedule's configured interval in days
        weather: Weather snapshot (see services.weather)
        is_indoor: Indoor plants only get the winter dormancy stretch
        season: 'spring', 'summer', 'autumn' or 'winter'

    Returns:
        {
            "adjusted_interval": int,  # never below 1
            "reason": str | None       # None when nothing changed
        }

    Example:
        >>> adjust_interval_for_weather(7, weather, is_indoor=False, season="winter")
        {"adjusted_interval": 10, "reason": "Extended due to winter season"}
    """
    if is_indoor:
        if season == "winter":
            return {
                "adjusted_interval": _round_half_up(base_interval * INDOOR_WINTER_MULTIPLIER),
                "reason": "Extended for winter dormancy",
            }
        return {"adjusted_interval": base_interval, "reason": None}

    current = weather.get("current") or {}
    daily = weather.get("daily") or []
    temperature = current.get("temperature") or 0
    humidity = current.get("humidity") or 0

    adjustment = 0
    reasons: List[str] = []

    rain_next_days = sum(day.get("precipitation_sum") or 0 for day in daily[:RAIN_LOOKAHEAD_DAYS])
    if rain_next_days > RAIN_THRESHOLD_MM:
        adjustment += ADJUST_RAIN
        reasons.append("rain forecast")

    if humidity > HIGH_HUMIDITY_PERCENT:
        adjustment += ADJUST_HUMIDITY
        reasons.append("high humidity")

    if temperature > HIGH_TEMPERATURE_C:
        adjustment += ADJUST_HEAT
        reasons.append("high temperature")

    if season == "winter":
        adjustment += ADJUST_WINTER
        reasons.append("winter season")
    elif season == "summer" and temperature > SUMMER_HEAT_C:
        adjustment += ADJUST_SUMMER_HEAT
        reasons.append("summer heat")

    if adjustment == 0:
        return {"adjusted_interval": base_interval, "reason": None}

    direction = "Extended" if adjustment > 0 else "Shortened"
    return {
        "adjusted_interval": max(MIN_INTERVAL, base_interval + adjustment),
        "reason": f"{direction} due to {', '.join(reasons)}",
    }


def is_good_day_for_outdoor_care(weather: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check today's forecast for outdoor work (repotting, pruning, treatments).

    Returns:
        {"is_good": bool, "reason": str}
    """
    daily = weather.get("daily") or []
    today: Optional[Dict[str, Any]] = daily[0] if daily else None
    if not today:
        return {"is_good": False, "reason": "No forecast available"}

    if (today.get("precipitation_sum") or 0) > OUTDOOR_RAIN_LIMIT_MM:
        return {"is_good": False, "reason": "Rain expected today"}
    temp_min = today.get("temperature_min")
    temp_max = today.get("temperature_max")
    if temp_min is not None and temp_min < OUTDOOR_COLD_LIMIT_C:
        return {"is_good": False, "reason": "Too cold for outdoor work"}
    if temp_max is not None and temp_max > OUTDOOR_HEAT_LIMIT_C:
        return {"is_good": False, "reason": "Too hot for outdoor work"}
    if (today.get("weather_code") or 0) >= STORM_WEATHER_CODE:
        return {"is_good": False, "reason": "Storms expected"}

    return {"is_good": True, "reason": "Good conditions for outdoor care"}
