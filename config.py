"""
Configuration for the to-do API.

Settings live on a small class hierarchy (``Config`` and one subclass per
environment) selected with ``get_config`` from ``FLASK_ENV``.

Persistence is two JSON files under ``DATA_DIR``::

    <DATA_DIR>/users/users.json
    <DATA_DIR>/tasks/tasks.json

``USERS_FILE`` and ``TASKS_FILE`` point either file somewhere else, and
``store_paths`` resolves the final locations.  The test profile uses its own
data directory so test runs never touch development data.

The RS256 key pair is not part of any settings class.  ``load_jwt_keys``
reads it from the environment when the application is created, either as
raw PEM text (``JWT_PRIVATE_KEY``) or as a file path
(``JWT_PRIVATE_KEY_PATH``); the test profile looks at ``TEST_``-prefixed
variables first.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

BASE_DIR = Path(__file__).resolve().parent

KEY_NAMES = ("JWT_PRIVATE_KEY", "JWT_PUBLIC_KEY")


def _env(name: str) -> str:
    return os.environ.get(name, "").strip()


def _load_key(name: str) -> str:
    """
    Read the PEM key configured under *name* or ``<name>_PATH``.

    Raw PEM text wins over the file path.
    """
    raw_key = _env(name)
    if raw_key:
        return raw_key

    path_var = f"{name}_PATH"
    key_path = _env(path_var)
    if not key_path:
        raise RuntimeError(f"Missing JWT key configuration: set {name} or {path_var}.")

    try:
        return Path(key_path).read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(
            f"Unable to read JWT key file at '{key_path}' from {path_var}."
        ) from exc


def _has_key_source(name: str) -> bool:
    return bool(_env(name) or _env(f"{name}_PATH"))


def load_jwt_keys(*, testing: bool) -> tuple[str, str]:
    """
    Return the ``(private, public)`` signing keys.

    Under testing, the ``TEST_JWT_*`` variables are used as soon as any of
    them is set; otherwise the plain ``JWT_*`` variables apply.
    """
    prefix = ""
    if testing and any(_has_key_source(f"TEST_{name}") for name in KEY_NAMES):
        prefix = "TEST_"
    private_name, public_name = (f"{prefix}{name}" for name in KEY_NAMES)
    return _load_key(private_name), _load_key(public_name)


def store_paths(settings: Mapping[str, Any]) -> tuple[Path, Path]:
    """Resolve the users and tasks store files for a loaded configuration."""
    data_dir = Path(settings["DATA_DIR"])
    users_file = settings.get("USERS_FILE") or data_dir / "users" / "users.json"
    tasks_file = settings.get("TASKS_FILE") or data_dir / "tasks" / "tasks.json"
    return Path(users_file), Path(tasks_file)


class Config:
    """
    Base configuration shared by all environments.

    Every setting can also be controlled via an environment variable so
    that container orchestrators can inject secrets at deploy time.

    Attributes:
        DATA_DIR: Directory holding the ``users/`` and ``tasks/`` store files.
        USERS_FILE: Explicit path of the users store file.  Derived from
            ``DATA_DIR`` when unset.
        TASKS_FILE: Explicit path of the tasks store file.  Derived from
            ``DATA_DIR`` when unset.
        JWT_EXPIRY_HOURS: Lifetime of a newly issued token.
        JWT_CLOCK_SKEW_SECONDS: Tolerance for clock differences when
            checking ``exp`` / ``iat``.
        JWT_ISSUER: Value of the ``iss`` claim issued and required.
        JWT_AUDIENCE: Value of the ``aud`` claim issued and required.
        PASSWORD_HASH_METHOD: Werkzeug hashing method for new passwords.
    """

    SECRET_KEY: str = os.environ.get(
        "SECRET_KEY", "todo-api-dev-secret-change-in-production"
    )

    DATA_DIR: str = os.environ.get("DATA_DIR", str(BASE_DIR / "db"))
    USERS_FILE: str | None = os.environ.get("USERS_FILE") or None
    TASKS_FILE: str | None = os.environ.get("TASKS_FILE") or None

    JWT_EXPIRY_HOURS: int = int(os.environ.get("JWT_EXPIRY_HOURS", "24"))
    JWT_CLOCK_SKEW_SECONDS: int = int(os.environ.get("JWT_CLOCK_SKEW_SECONDS", "30"))
    JWT_ISSUER: str = os.environ.get("JWT_ISSUER", "TodoApi")
    JWT_AUDIENCE: str = os.environ.get("JWT_AUDIENCE", "TodoApi")

    PASSWORD_HASH_METHOD: str = os.environ.get("PASSWORD_HASH_METHOD", "scrypt")


class DevelopmentConfig(Config):
    """Configuration for local development."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """
    Configuration for the automated test suite.

    Uses a **separate** data directory so that test runs never touch
    development data, and a cheap hashing setting so registration-heavy
    tests stay fast.
    """

    DEBUG: bool = True
    TESTING: bool = True
    DATA_DIR: str = os.environ.get(
        "TEST_DATA_DIR", str(BASE_DIR / "instance" / "test_db")
    )
    PASSWORD_HASH_METHOD: str = "pbkdf2:sha256:1000"


class ProductionConfig(Config):
    """
    Configuration for production deployments.

    All secrets **must** be supplied through environment variables.
    """

    DEBUG: bool = False
    TESTING: bool = False


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Resolve a configuration class by environment name.

    Args:
        env: One of ``"development"``, ``"testing"``, or
            ``"production"``.  When ``None``, the ``FLASK_ENV``
            environment variable is consulted, falling back to
            ``"development"`` if unset.

    Returns:
        The configuration class (not an instance).  Falls back to
        ``DevelopmentConfig`` for unrecognised names.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
