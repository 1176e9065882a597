"""
Bearer-token authentication for protected routes.

Provides a decorator that verifies the ``Authorization: Bearer <token>``
header with the application's :class:`~todo_api.tokens.TokenIssuer` and
stores the caller's identity on ``flask.g``, plus a helper that services
the routes use to read it back.

Key Concepts Demonstrated:
- Decorator pattern for endpoint authentication (``require_auth``)
- Using ``flask.g`` to store request-scoped user identity
- Raising domain errors that the app-level error handler renders
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import wraps

from flask import g, request

from .errors import AuthError
from .services import get_services

logger = logging.getLogger(__name__)

MISSING_HEADER = "Missing or invalid Authorization header"
INVALID_TOKEN = "Invalid or expired token"


def extract_bearer_token() -> str | None:
    """
    Return the token from an ``Authorization: Bearer <token>`` header.

    Returns ``None`` if the header is absent, uses another scheme, or is
    empty after stripping whitespace.
    """
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    token = auth_header[7:].strip()
    return token or None


def require_auth(view_func: Callable):
    """
    Decorator that enforces Bearer-token authentication on API endpoints.

    On success ``g.user_id`` and ``g.username`` hold the verified identity.
    On failure an :class:`AuthError` is raised before the wrapped view runs,
    which the application renders as a ``401`` JSON error.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        token = extract_bearer_token()
        if token is None:
            raise AuthError(MISSING_HEADER)

        identity = get_services().tokens.verify(token)
        if identity is None:
            logger.warning("Rejected bearer token for %s %s", request.method, request.path)
            raise AuthError(INVALID_TOKEN)

        g.user_id = identity["user_id"]
        g.username = identity["username"]
        return view_func(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    """Return the authenticated caller's id, or raise :class:`AuthError`."""
    user_id = g.get("user_id")
    if not isinstance(user_id, int):
        raise AuthError("User ID not found")
    return user_id
