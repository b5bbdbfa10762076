"""
Defines JSON endpoints for care schedules, reminders and weather.

Endpoints:
- /care-types: Care type display info and interval presets
- /reminders/status: Urgency status for a single due date
- /care-schedules: Build a validated schedule
- /care-schedules/status: Status, filtering and ordering for a list of schedules
- /care-logs: Apply a care log to a plant's schedules
- /species/suggest-interval: Interval suggested by a species' watering text
- /weather: Current weather and 7-day forecast for a location
- /weather/alerts: Weather alerts, season and seasonal tips
- /weather/adjust-interval: Weather/season adjusted interval suggestion
- /trash/status: Retention countdown for a soft-deleted plant

Persistence is handled by the caller; schedules travel in request bodies.
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from flask import Blueprint, request, jsonify, current_app
from ..constants import CARE_TYPES, REMINDER_STATUSES
from ..extensions import limiter
from ..services import care_reminders, care_schedules, reminder_adjustments, seasonal_context, trash, weather
from ..utils.errors import sanitize_error, log_info, log_warning, GENERIC_MESSAGES
from ..utils.validation import (
    normalize_location,
    parse_bool,
    parse_coordinates,
    parse_date_param,
    validate_care_type,
    validate_interval_days,
)


api_bp = Blueprint("api", __name__)


def _weather_limit() -> str:
    return current_app.config.get("RATELIMIT_WEATHER", "20 per minute")


@api_bp.before_request
def _enforce_ajax_for_mutations():
    """Enforce X-Requested-With header on all state-changing API requests.

    Custom headers cannot be set by cross-origin requests without CORS and
    HTML forms cannot set them, so this protects the whole blueprint from
    CSRF without per-endpoint tokens.
    """
    if request.method in ("POST", "PUT", "DELETE", "PATCH"):
        if request.headers.get("X-Requested-With") != "XMLHttpRequest":
            return jsonify({
                "success": False,
                "error": "Invalid request. Please refresh the page and try again."
            }), 403


def _error(message: str, status: int = 400):
    return jsonify({"success": False, "error": message}), status


def _naive(value: datetime) -> datetime:
    # Schedules compare on wall-clock days; mixed aware/naive values can't be compared
    return value.replace(tzinfo=None) if value.tzinfo else value


def _load_schedules(raw: Any) -> Tuple[Optional[List[Dict[str, Any]]], Optional[str]]:
    """Validate schedule dicts from a request body, parsing their dates."""
    if raw is None:
        return [], None
    if not isinstance(raw, list):
        return None, "schedules must be a list."

    schedules = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            return None, f"schedules[{i}] must be an object."

        care_type, error = validate_care_type(item.get("care_type"))
        if error:
            return None, f"schedules[{i}]: {error}"
        interval_days, error = validate_interval_days(item.get("interval_days"))
        if error:
            return None, f"schedules[{i}]: {error}"
        next_due, error = parse_date_param(item.get("next_due_date"), "next_due_date")
        if error:
            return None, f"schedules[{i}]: {error}"

        last_cared_at = None
        if item.get("last_cared_at"):
            last_cared_at, error = parse_date_param(item["last_cared_at"], "last_cared_at")
            if error:
                return None, f"schedules[{i}]: {error}"
            last_cared_at = _naive(last_cared_at)

        schedules.append({
            **item,
            # Matches the str() form create_care_log uses when looking schedules up
            "plant_id": str(item.get("plant_id") or "").strip(),
            "care_type": care_type,
            "interval_days": interval_days,
            "next_due_date": care_reminders.calculate_next_due_date(_naive(next_due), 0),
            "last_cared_at": last_cared_at,
            "enabled": parse_bool(item.get("enabled", True)),
        })
    return schedules, None


def _get_json_body() -> Optional[Dict[str, Any]]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


@api_bp.route("/care-types")
def care_types():
    """Display info and interval presets for every care type."""
    items = []
    for care_type in CARE_TYPES:
        intervals = care_reminders.get_suggested_intervals(care_type)
        items.append({
            "care_type": care_type,
            **care_reminders.CARE_TYPE_INFO[care_type],
            "suggested_intervals": [
                {"days": days, "label": care_reminders.format_interval(days)} for days in intervals
            ],
        })
    return jsonify({"care_types": items})


@api_bp.route("/reminders/status")
def reminder_status():
    """
    Status for one due date.

    Query params:
        next_due: ISO date (required)
        now: ISO date/datetime overriding the current time (optional)
    """
    next_due, error = parse_date_param(request.args.get("next_due"), "next_due")
    if error:
        return _error(error)

    now = None
    if request.args.get("now"):
        now, error = parse_date_param(request.args.get("now"), "now")
        if error:
            return _error(error)

    info = care_reminders.get_reminder_status(next_due, now)
    info["badge_variant"] = care_reminders.get_status_badge_variant(info["status"])
    return jsonify(info)


@api_bp.route("/care-schedules", methods=["POST"])
def create_care_schedule():
    """
    Build a validated schedule row.

    Request body (JSON):
        {
            "plant_id": str,
            "care_type": "WATERING" | ...,
            "interval_days": 1-365,
            "next_due_date": ISO date (optional)
        }
    """
    data = _get_json_body()
    if data is None:
        return _error("Invalid JSON body")

    next_due = None
    if data.get("next_due_date"):
        next_due, error = parse_date_param(data["next_due_date"], "next_due_date")
        if error:
            return _error(error)
        next_due = _naive(next_due)

    schedule, error = care_schedules.build_schedule(
        plant_id=str(data.get("plant_id") or "").strip(),
        care_type=data.get("care_type"),
        interval_days=data.get("interval_days"),
        next_due_date=next_due,
    )
    if error:
        return _error(error)

    return jsonify({"success": True, "schedule": care_schedules.serialize_schedule(schedule)}), 201


@api_bp.route("/care-schedules/status", methods=["POST"])
def care_schedules_status():
    """
    Enabled schedules with status info, soonest first.

    Request body (JSON):
        {
            "schedules": [...],
            "status": "overdue" | "due-today" | "due-soon" | "upcoming" (optional),
            "due_within": int days (optional)
        }
    """
    data = _get_json_body()
    if data is None:
        return _error("Invalid JSON body")

    schedules, error = _load_schedules(data.get("schedules"))
    if error:
        return _error(error)

    status = data.get("status") or None
    if status and status not in REMINDER_STATUSES:
        return _error(f"Invalid status. Must be one of: {', '.join(REMINDER_STATUSES)}")

    due_within = None
    if data.get("due_within") is not None:
        try:
            due_within = int(data["due_within"])
        except (TypeError, ValueError):
            return _error("due_within must be a number of days.")

    try:
        filtered = care_schedules.filter_schedules(schedules, status=status, due_within=due_within)
    except Exception as e:
        return _error(sanitize_error(e, "internal", "Schedule status failed"), 500)

    return jsonify({"schedules": [care_schedules.serialize_schedule(s) for s in filtered]})


@api_bp.route("/care-logs", methods=["POST"])
def create_care_log():
    """
    Apply a care log to the plant's schedules.

    Request body (JSON):
        {
            "plant_id": str,
            "care_type": "WATERING" | ...,
            "cared_at": ISO datetime (optional, defaults to now),
            "species_water_frequency": str (optional),
            "schedules": [...]  # the plant's current schedules
        }

    Returns the updated or created schedule (null when no schedule applies).
    """
    data = _get_json_body()
    if data is None:
        return _error("Invalid JSON body")

    plant_id = str(data.get("plant_id") or "").strip()
    if not plant_id:
        return _error("Plant ID and care type are required")

    care_type, error = validate_care_type(data.get("care_type"))
    if error:
        return _error(error)

    cared_at = None
    if data.get("cared_at"):
        cared_at, error = parse_date_param(data["cared_at"], "cared_at")
        if error:
            return _error(error)
        cared_at = _naive(cared_at)

    schedules, error = _load_schedules(data.get("schedules"))
    if error:
        return _error(error)

    schedule, created = care_schedules.record_care(
        schedules,
        plant_id,
        care_type,
        cared_at=cared_at,
        species_water_frequency=data.get("species_water_frequency"),
    )
    log_info("Care logged", plant_id=plant_id, care_type=care_type, schedule_created=created)

    return jsonify({
        "success": True,
        "created": created,
        "schedule": care_schedules.serialize_schedule(schedule) if schedule else None,
    }), 201


@api_bp.route("/species/suggest-interval")
def suggest_interval():
    """Suggested watering interval for a species' free-text frequency (?text=...)."""
    text = request.args.get("text", "")
    days = care_reminders.suggest_interval_from_species(text)
    return jsonify({"interval_days": days, "label": care_reminders.format_interval(days)})


@api_bp.route("/weather")
@limiter.limit(_weather_limit)
def get_weather():
    """Current weather and 7-day forecast for ?lat=..&lon=.."""
    coords, error = parse_coordinates(request.args.get("lat"), request.args.get("lon"))
    if error:
        return _error(error)

    snapshot = weather.fetch_weather(*coords)
    if snapshot is None:
        log_warning("Weather unavailable", lat=coords[0], lon=coords[1])
        return _error(GENERIC_MESSAGES["weather"], 502)

    current = snapshot["current"]
    return jsonify({
        "weather": snapshot,
        "description": weather.get_weather_description(current.get("weather_code")),
        "icon": weather.get_weather_icon(current.get("weather_code") or 0),
        "outdoor_care": reminder_adjustments.is_good_day_for_outdoor_care(snapshot),
    })


@api_bp.route("/weather/alerts")
@limiter.limit(_weather_limit)
def get_weather_alerts():
    """
    Alerts, season and tips for ?lat=..&lon=..&outdoor=1

    Without a location, returns an empty payload asking for one.
    """
    if request.args.get("lat") is None or request.args.get("lon") is None:
        return jsonify({
            "alerts": [],
            "season": None,
            "seasonal_tips": [],
            "message": "Enable location for weather alerts",
        })

    coords, error = parse_coordinates(request.args.get("lat"), request.args.get("lon"))
    if error:
        return _error(error)
    has_outdoor_plants = parse_bool(request.args.get("outdoor"))

    snapshot = weather.fetch_weather(*coords)
    if snapshot is None:
        log_warning("Weather alerts unavailable", lat=coords[0], lon=coords[1])
        return _error(GENERIC_MESSAGES["weather"], 502)

    season = seasonal_context.get_current_season(coords[0])
    return jsonify({
        "alerts": weather.get_weather_alerts(snapshot, has_outdoor_plants),
        "season": season,
        "season_emoji": seasonal_context.SEASON_EMOJI[season],
        "seasonal_tips": seasonal_context.get_seasonal_tips(season),
        "has_outdoor_plants": has_outdoor_plants,
    })


@api_bp.route("/weather/adjust-interval", methods=["POST"])
@limiter.limit(_weather_limit)
def adjust_interval():
    """
    Weather and season adjusted interval suggestion.

    Request body (JSON):
        {
            "base_interval": 1-365,
            "lat": float,
            "lon": float,
            "location": "INDOOR" | "OUTDOOR"
        }

    Indoor plants never trigger a weather lookup.
    """
    data = _get_json_body()
    if data is None:
        return _error("Invalid JSON body")

    base_interval, error = validate_interval_days(data.get("base_interval"))
    if error:
        return _error(error)
    coords, error = parse_coordinates(data.get("lat"), data.get("lon"))
    if error:
        return _error(error)

    is_indoor = normalize_location(data.get("location")) == "INDOOR"
    season = seasonal_context.get_current_season(coords[0])

    snapshot: Dict[str, Any] = {}
    if not is_indoor:
        snapshot = weather.fetch_weather(*coords)
        if snapshot is None:
            log_warning("Interval adjustment without weather", lat=coords[0], lon=coords[1])
            return _error(GENERIC_MESSAGES["weather"], 502)

    result = reminder_adjustments.adjust_interval_for_weather(base_interval, snapshot, is_indoor, season)
    result["base_interval"] = base_interval
    result["season"] = season
    result["label"] = care_reminders.format_interval(result["adjusted_interval"])
    return jsonify(result)


@api_bp.route("/trash/status")
def trash_status():
    """Retention countdown for a plant deleted at ?deleted_at=ISO datetime."""
    deleted_at, error = parse_date_param(request.args.get("deleted_at"), "deleted_at")
    if error:
        return _error(error)

    return jsonify({
        "expires_at": trash.get_expiration_date(deleted_at).isoformat(),
        "days_remaining": trash.get_days_until_permanent_delete(deleted_at),
        "label": trash.format_time_until_delete(deleted_at),
        "expired": trash.is_expired(deleted_at),
    })
