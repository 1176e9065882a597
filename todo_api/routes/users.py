"""
User API endpoints.

Endpoints:
    POST /users/register  -- Create a new user account.
    POST /users/login     -- Authenticate and receive a JWT.

Both endpoints are public.  Errors raised by :class:`UserService` are
rendered by the application-level error handler.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, jsonify, request

from ..services import get_services

users_bp = Blueprint("users", __name__)


def _json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@users_bp.route("/register", methods=["POST"])
def register() -> tuple[Response, int]:
    """
    Register a new user account.

    Expects a JSON body with ``username`` and ``password``.

    Returns:
        200 with ``{id, username}`` on success.
        400 if either field is missing or blank.
        409 if the username is already taken.
    """
    data = _json_body()
    user = get_services().users.register(data.get("username"), data.get("password"))
    return jsonify(user.to_dict()), 200


@users_bp.route("/login", methods=["POST"])
def login() -> tuple[Response, int]:
    """
    Authenticate a user and issue a JWT.

    The ``"Invalid username or password"`` message is the same for unknown
    users and wrong passwords.

    Returns:
        200 with ``{token}`` on success.
        401 if the credentials are incorrect.
    """
    data = _json_body()
    token = get_services().users.login(data.get("username"), data.get("password"))
    return jsonify({"token": token}), 200
