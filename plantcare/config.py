"""
Centralized configuration for all environments.

Select a config by setting:
  APP_CONFIG=plantcare.config.DevConfig      # local dev
  APP_CONFIG=plantcare.config.ProdConfig     # production (default if unset)
  APP_CONFIG=plantcare.config.TestConfig     # pytest

Notes:
- SECRET_KEY is read from FLASK_SECRET_KEY
- Rate limiting uses Flask-Limiter v3 keys (RATELIMIT_*).
- Weather data comes from Open-Meteo, which needs no API key.
"""

from __future__ import annotations
import os
import secrets


class BaseConfig:
    # Secrets & basics: generate a random key if env var is missing so dev/test
    # never runs with an empty string (production enforces a real key at startup)
    SECRET_KEY = os.getenv("FLASK_SECRET_KEY") or secrets.token_hex(32)
    DEBUG = False
    TESTING = False
    JSON_SORT_KEYS = False

    # Weather (Open-Meteo forecast API)
    OPEN_METEO_BASE_URL = os.getenv("OPEN_METEO_BASE_URL", "https://api.open-meteo.com/v1/forecast")
    WEATHER_REQUEST_TIMEOUT = float(os.getenv("WEATHER_REQUEST_TIMEOUT", "8"))
    WEATHER_FORECAST_DAYS = 7
    WEATHER_CACHE_TTL = int(os.getenv("WEATHER_CACHE_TTL", "600"))  # 10 minutes
    WEATHER_CACHE_MAX_ENTRIES = int(os.getenv("WEATHER_CACHE_MAX_ENTRIES", "256"))

    # Care schedule bounds (validated at the HTTP boundary)
    DEFAULT_INTERVAL_DAYS = 7
    MIN_INTERVAL_DAYS = 1
    MAX_INTERVAL_DAYS = 365

    # Trash retention for soft-deleted plants
    TRASH_RETENTION_DAYS = int(os.getenv("TRASH_RETENTION_DAYS", "7"))

    # Flask-Limiter v3
    RATELIMIT_ENABLED = os.getenv("RATELIMIT_ENABLED", "true").lower() == "true"
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", "60 per minute; 2000 per day")
    RATELIMIT_WEATHER = os.getenv("RATELIMIT_WEATHER", "20 per minute")

    # Misc
    PREFERRED_URL_SCHEME = os.getenv("PREFERRED_URL_SCHEME", "https")


class ProdConfig(BaseConfig):
    """Production settings (selected by default if APP_CONFIG is unset)."""
    pass


class DevConfig(BaseConfig):
    """Developer-friendly settings."""
    ENV = "development"
    DEBUG = True
    PREFERRED_URL_SCHEME = "http"
    # Short cache so forecast changes show up while developing
    WEATHER_CACHE_TTL = 60


class TestConfig(BaseConfig):
    """CI/pytest settings."""
    TESTING = True
    DEBUG = True
    # Usually disable the limiter in tests to avoid flakiness
    RATELIMIT_ENABLED = False
    WTF_CSRF_ENABLED = False
