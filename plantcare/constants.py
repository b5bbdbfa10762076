"""
Shared constants used across the application.

This module contains constants that need to be consistent across
different parts of the application (validation, services, API payloads).
"""

# Care activity types (one schedule per plant per type)
CARE_TYPES = [
    "WATERING",
    "FERTILIZING",
    "REPOTTING",
    "PRUNING",
    "PEST_TREATMENT",
    "OTHER",
]

CARE_TYPE_WATERING = "WATERING"

# Plant location options. Only OUTDOOR plants get weather-driven adjustments.
PLANT_LOCATIONS = [
    ("INDOOR", "Indoor"),
    ("OUTDOOR", "Outdoor"),
]

# Meteorological seasons, in calendar order for the northern hemisphere
SEASONS = ["winter", "spring", "summer", "autumn"]

# Reminder statuses, most urgent first
REMINDER_STATUSES = ["overdue", "due-today", "due-soon", "upcoming"]
