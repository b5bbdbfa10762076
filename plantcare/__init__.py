"""
Application factory and global configuration.

Creates the Flask app, applies security headers, configures rate limiting and
the weather cache, registers blueprints, Jinja filters and CLI commands. This
file keeps startup/config concerns together and avoids domain logic here.
"""

from __future__ import annotations
import logging
import os
from flask import Flask, Response
from flask_wtf.csrf import CSRFProtect
from dotenv import load_dotenv  # <-- ensure .env is loaded for local dev
from .extensions import limiter
from .routes.api import api_bp
from .routes.web import web_bp
from .utils.cache import configure_weather_cache


def _validate_production_security(app: Flask, cfg_path: str) -> None:
    """
    Validate critical security settings in production environments.

    Raises RuntimeError if production security requirements are not met.
    This prevents the app from starting with insecure configurations.

    Checks:
    - SECRET_KEY must be set and strong (>= 32 characters)
    - DEBUG must be False (no debug mode in production)

    Args:
        app: Flask application instance
        cfg_path: Config path being used (e.g., "plantcare.config.ProdConfig")
    """
    is_production = "ProdConfig" in cfg_path
    is_test = app.config.get("TESTING", False)

    if not is_production or is_test:
        return

    errors = []

    secret_key = app.config.get("SECRET_KEY", "")
    if not secret_key:
        errors.append(
            "SECRET_KEY is not set. Set FLASK_SECRET_KEY environment variable. "
            "Generate with: python -c 'import secrets; print(secrets.token_hex(32))'"
        )
    elif len(secret_key) < 32:
        errors.append(
            f"SECRET_KEY is too weak ({len(secret_key)} chars). "
            "Must be at least 32 characters for production security."
        )

    if app.config.get("DEBUG", False):
        errors.append(
            "DEBUG must be False in production. Debug mode exposes sensitive information "
            "and should never be enabled in production environments."
        )

    if errors:
        error_msg = "\n\n[ERROR] PRODUCTION SECURITY VALIDATION FAILED:\n\n" + "\n\n".join(f"  * {err}" for err in errors)
        error_msg += "\n\n[WARNING] The application will not start until these security issues are resolved.\n"
        raise RuntimeError(error_msg)

    app.logger.info("[OK] Production security validation passed")


def create_app(config_object: str | None = None) -> Flask:
    # override=False so production env vars are not overwritten by a stale .env file
    load_dotenv(override=False)

    app = Flask(__name__)

    # Allow APP_CONFIG to override (e.g., plantcare.config.DevConfig)
    cfg_path = config_object or os.getenv("APP_CONFIG", "plantcare.config.ProdConfig")
    try:
        app.config.from_object(cfg_path)
    except (ImportError, AttributeError) as e:
        app.logger.warning(f"Could not load config object {cfg_path}: {e}")

    if not app.debug and not app.testing:
        app.logger.setLevel(logging.INFO)

    _validate_production_security(app, cfg_path)

    limiter.init_app(app)

    if not app.config.get("RATELIMIT_ENABLED", True):
        limiter.enabled = False

    configure_weather_cache(
        ttl=app.config.get("WEATHER_CACHE_TTL", 600),
        maxsize=app.config.get("WEATHER_CACHE_MAX_ENTRIES", 256),
    )

    # API requests are protected by the X-Requested-With check instead of tokens
    csrf = CSRFProtect(app)
    csrf.exempt(api_bp)

    @app.after_request
    def apply_security_headers(resp: Response) -> Response:
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        resp.headers["X-Frame-Options"] = "DENY"

        # HSTS only when served over HTTPS
        if app.config.get("PREFERRED_URL_SCHEME", "http") == "https":
            resp.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return resp

    # Blueprints
    app.register_blueprint(web_bp)
    app.register_blueprint(api_bp, url_prefix="/api/v1")

    # Register Jinja filters (defined in plantcare/utils/filters.py for testability)
    from .utils.filters import due_label, interval_label
    app.jinja_env.filters["due_label"] = due_label
    app.jinja_env.filters["interval_label"] = interval_label

    # Register CLI commands
    from plantcare.cli import suggest_interval_command, weather_report_command
    app.cli.add_command(suggest_interval_command)
    app.cli.add_command(weather_report_command)

    return app
