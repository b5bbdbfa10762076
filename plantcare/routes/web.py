"""
Service-level routes (health checks).
"""

from flask import Blueprint, jsonify
from ..extensions import limiter

web_bp = Blueprint("web", __name__)


@web_bp.route("/healthz")
@limiter.exempt
def healthz():
    """Simple health endpoint to verify the server responds."""
    return jsonify({"status": "ok"}), 200
