"""
Error helpers for the API layer.

Exceptions are logged in full through the app logger while clients only see
one of GENERIC_MESSAGES.
"""

from __future__ import annotations
from flask import current_app

# User-friendly generic error messages
GENERIC_MESSAGES = {
    "internal": "We're experiencing technical difficulties. Please try again.",
    "validation": "The information provided is invalid. Please check and try again.",
    "weather": "Failed to fetch weather data. Please try again later.",
    "not_found": "The requested item was not found.",
}


def sanitize_error(
    error: Exception,
    error_type: str = "internal",
    log_prefix: str = ""
) -> str:
    """
    Sanitize error message for user display and log full details.

    Security: Prevents exposing internal error messages or stack traces to
    API clients. Full details are logged for debugging.

    Args:
        error: The exception that occurred
        error_type: Type of error (internal, validation, weather, not_found)
        log_prefix: Optional prefix for log message context

    Returns:
        User-friendly error message

    Examples:
        >>> try:
        ...     statuses = filter_schedules(schedules)
        ... except Exception as e:
        ...     return jsonify({"success": False, "error": sanitize_error(e)}), 500
    """
    error_message = str(error)
    log_message = f"{log_prefix}: {error_message}" if log_prefix else error_message

    if error_type in ["validation", "not_found"]:
        # These are expected errors (client mistakes), log as info
        current_app.logger.info(f"Expected error - {log_message}")
    else:
        # Unexpected errors (bugs, upstream failures), log with stack trace
        current_app.logger.error(f"Unexpected error - {log_message}", exc_info=True)

    return GENERIC_MESSAGES.get(error_type, GENERIC_MESSAGES["internal"])


def _with_context(message: str, context: dict) -> str:
    if not context:
        return message
    return f"{message} | Context: " + ", ".join(f"{k}={v}" for k, v in context.items())


def log_warning(message: str, **context) -> None:
    """
    Log a warning with key=value context appended.

    Examples:
        >>> log_warning("Weather unavailable", lat=47.6, lon=-122.3)
    """
    current_app.logger.warning(_with_context(message, context))


def log_info(message: str, **context) -> None:
    """Log an info message with key=value context appended."""
    current_app.logger.info(_with_context(message, context))
