"""
To-do API Flask application factory.

Provides the ``create_app`` factory that assembles the service: loads the
configuration and signing keys, builds the JSON stores and services,
registers the blueprints, and installs request logging and JSON error
handlers.

The service registers three blueprints:
  * **api_bp**   -- root liveness message and ``/health``.
  * **users_bp** -- ``/users/register`` and ``/users/login``.
  * **tasks_bp** -- bearer-protected ``/tasks/*`` CRUD.

Key Concepts Demonstrated:
- Application factory pattern (``create_app``)
- Services built once per app and shared through ``app.extensions``
- App-wide error handlers mapping domain errors to JSON responses
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Flask, Response, jsonify, request

from config import get_config, load_jwt_keys

from .errors import InternalError, TodoApiError
from .services import EXTENSION_KEY, ServiceRegistry

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _json_error(message: str, status_code: int) -> tuple[Response, int]:
    """Build the ``{"error": "..."}`` envelope shared by every endpoint."""
    return jsonify({"error": message}), status_code


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(TodoApiError)
    def handle_api_error(error: TodoApiError) -> tuple[Response, int]:
        if error.status_code >= 500:
            logger.error("%s: %s", type(error).__name__, error.message)
        return _json_error(error.public_message, error.status_code)

    @app.errorhandler(404)
    def not_found(error: Exception) -> tuple[Response, int]:
        return _json_error("Resource not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(error: Exception) -> tuple[Response, int]:
        return _json_error("Method not allowed", 405)

    @app.errorhandler(500)
    def internal_error(error: Exception) -> tuple[Response, int]:
        original = getattr(error, "original_exception", None) or error
        wrapped = InternalError(f"{type(original).__name__}: {original}")
        logger.error("Internal server error: %s", wrapped.message, exc_info=original)
        return _json_error(wrapped.public_message, wrapped.status_code)


def _register_request_logging(app: Flask) -> None:
    @app.before_request
    def log_request() -> None:
        query = request.query_string.decode("utf-8", errors="replace")
        logger.info(
            "Handling request: %s %s%s from %s",
            request.method,
            request.path,
            f"?{query}" if query else "",
            request.remote_addr,
        )

    @app.after_request
    def log_response(response: Response) -> Response:
        logger.info("Finished handling request: %s", response.status_code)
        return response


def create_app(
    config_name: str | None = None,
    config_overrides: dict[str, Any] | None = None,
) -> Flask:
    """
    Create and configure the to-do API application.

    Args:
        config_name: The configuration environment to load (e.g.
            ``"development"``, ``"testing"``, ``"production"``).  When
            ``None``, the value is resolved from the ``FLASK_ENV``
            environment variable, defaulting to ``"development"``.
        config_overrides: Settings applied on top of the configuration
            class, such as a temporary ``DATA_DIR`` in tests.  Supplying
            ``JWT_PRIVATE_KEY`` and ``JWT_PUBLIC_KEY`` here skips loading
            them from the environment.

    Returns:
        A fully configured :class:`~flask.Flask` application instance.

    Raises:
        RuntimeError: If no JWT key pair is configured.
    """
    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    if config_overrides:
        app.config.update(config_overrides)

    if not (app.config.get("JWT_PRIVATE_KEY") and app.config.get("JWT_PUBLIC_KEY")):
        private_key, public_key = load_jwt_keys(testing=bool(app.config.get("TESTING")))
        app.config["JWT_PRIVATE_KEY"] = private_key
        app.config["JWT_PUBLIC_KEY"] = public_key

    logger.info("Creating to-do API app with config: %s", config_class.__name__)

    registry = ServiceRegistry.from_config(app.config)
    app.extensions[EXTENSION_KEY] = registry
    logger.info(
        "Using stores %s and %s", registry.users.store.path, registry.tasks.store.path
    )

    from .routes.api import api_bp
    from .routes.tasks import tasks_bp
    from .routes.users import users_bp

    app.register_blueprint(api_bp)
    app.register_blueprint(users_bp, url_prefix="/users")
    app.register_blueprint(tasks_bp, url_prefix="/tasks")

    _register_request_logging(app)
    _register_error_handlers(app)

    return app
