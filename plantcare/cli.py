"""
Flask CLI commands for quick checks from a terminal.

Usage:
    flask suggest-interval "Water every 2-3 weeks"
    flask weather-report --lat 47.6 --lon -122.3
    flask weather-report --lat 47.6 --lon -122.3 --outdoor --base-interval 7
"""

from __future__ import annotations

import click
from flask.cli import with_appcontext


@click.command("suggest-interval")
@click.argument("text")
def suggest_interval_command(text: str) -> None:
    """Print the watering interval suggested for a species' frequency text."""
    from plantcare.services.care_reminders import format_interval, suggest_interval_from_species

    days = suggest_interval_from_species(text)
    click.echo(f"{days} days ({format_interval(days)})")


@click.command("weather-report")
@click.option("--lat", type=click.FloatRange(-90, 90), required=True, help="Latitude of the garden.")
@click.option("--lon", type=click.FloatRange(-180, 180), required=True, help="Longitude of the garden.")
@click.option("--outdoor", is_flag=True, default=False, help="Treat plants as outdoor plants.")
@click.option("--base-interval", type=click.IntRange(1, 365), default=7, show_default=True,
              help="Watering interval to adjust.")
@with_appcontext
def weather_report_command(lat: float, lon: float, outdoor: bool, base_interval: int) -> None:
    """Fetch weather and print alerts, seasonal tips and an adjusted interval."""
    from plantcare.services import reminder_adjustments, seasonal_context, weather
    from plantcare.services.care_reminders import format_interval

    snapshot = weather.fetch_weather(lat, lon)
    if snapshot is None:
        click.echo("Error: weather data unavailable for this location.")
        raise SystemExit(1)

    current = snapshot["current"]
    code = current.get("weather_code") or 0
    click.echo(
        f"{weather.get_weather_icon(code)} {weather.get_weather_description(code)}, "
        f"{current.get('temperature')}°C, {current.get('humidity')}% humidity"
    )

    season = seasonal_context.get_current_season(lat)
    click.echo(f"\nSeason: {seasonal_context.SEASON_EMOJI[season]} {season}")
    for tip in seasonal_context.get_seasonal_tips(season):
        click.echo(f"  - {tip}")

    alerts = weather.get_weather_alerts(snapshot, outdoor)
    click.echo(f"\nAlerts: {len(alerts)}")
    for alert in alerts:
        click.echo(f"  {alert['icon']} [{alert['severity']}] {alert['title']}: {alert['message']}")

    result = reminder_adjustments.adjust_interval_for_weather(base_interval, snapshot, not outdoor, season)
    click.echo(f"\nInterval: {format_interval(base_interval)} -> {format_interval(result['adjusted_interval'])}")
    if result["reason"]:
        click.echo(f"  {result['reason']}")
