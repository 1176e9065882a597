"""
Service layer.

``ServiceRegistry`` bundles the stores, token issuer and services built by
the application factory; routes reach it through :func:`get_services`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from flask import current_app

from config import store_paths

from ..models import normalize_task_record, normalize_user_record
from ..store import JsonStore
from ..tokens import TokenIssuer
from .tasks import TaskService
from .users import UserService

EXTENSION_KEY = "todo_api"


@dataclass
class ServiceRegistry:
    tokens: TokenIssuer
    users: UserService
    tasks: TaskService

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> ServiceRegistry:
        users_file, tasks_file = store_paths(config)

        tokens = TokenIssuer.from_config(config)
        users = UserService(
            JsonStore(users_file, normalize=normalize_user_record),
            tokens,
            hash_method=config.get("PASSWORD_HASH_METHOD", "scrypt"),
        )
        tasks = TaskService(JsonStore(tasks_file, normalize=normalize_task_record))
        return cls(tokens=tokens, users=users, tasks=tasks)


def get_services() -> ServiceRegistry:
    """Return the registry of the application handling the current request."""
    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    "EXTENSION_KEY",
    "ServiceRegistry",
    "TaskService",
    "UserService",
    "get_services",
]
