"""
Service-level endpoints.

Endpoints:
    GET /        -- Plain-text liveness message.
    GET /health  -- JSON health probe for orchestration tools.
"""

from __future__ import annotations

import os

from flask import Blueprint, Response, jsonify

api_bp = Blueprint("api", __name__)


@api_bp.route("/", methods=["GET"])
def root() -> tuple[str, int]:
    return "Server is running", 200


@api_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """
    Liveness / readiness health-check endpoint.

    Returns:
        A 200 JSON response with ``status``, ``service``, and
        ``environment`` fields.
    """
    return jsonify(
        {
            "status": "healthy",
            "service": "todo-api",
            "environment": os.getenv("ENVIRONMENT", "unknown"),
        }
    ), 200
