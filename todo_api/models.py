"""
Data models for the to-do API.

Defines the records kept in the JSON store files, along with the task
status enumeration and its toggle cycle.  Each model converts to and from
the plain dictionaries stored on disk; the JSON keys are the same ones the
API returns (``userId``, ``passwordHash``).  Files written by the earlier
server use PascalCase keys (``Id``, ``UserId``, ``Password``); the
``normalize_*_record`` helpers rename them on load.

Key Concepts Demonstrated:
- Dataclass records with explicit (de)serialisation helpers
- ``str, Enum`` inheritance for JSON-friendly enumeration values
- Safe serialisation that excludes sensitive fields
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TaskStatus(str, Enum):
    """
    Enumeration of task statuses.

    Inherits from ``str`` so each member compares equal to the raw string
    stored in the task file and serialises without ``.value``.
    """

    OPEN = "open"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]

    @classmethod
    def next_status(cls, current: str) -> str:
        """
        Return the status that follows *current* in the toggle cycle.

        The cycle is ``open -> in-progress -> completed -> open``.  Values
        outside the cycle are returned unchanged.
        """
        return _STATUS_CYCLE.get(current, current)


_STATUS_CYCLE = {
    TaskStatus.OPEN.value: TaskStatus.IN_PROGRESS.value,
    TaskStatus.IN_PROGRESS.value: TaskStatus.COMPLETED.value,
    TaskStatus.COMPLETED.value: TaskStatus.OPEN.value,
}

# PascalCase keys written by the earlier server, mapped to the current ones.
_LEGACY_USER_KEYS = {"Id": "id", "Username": "username", "Password": "password"}
_LEGACY_TASK_KEYS = {"Id": "id", "Text": "text", "Status": "status", "UserId": "userId"}


def _rename_keys(record: dict[str, Any], renames: dict[str, str]) -> dict[str, Any]:
    normalized = dict(record)
    for old_key, new_key in renames.items():
        if old_key in normalized:
            value = normalized.pop(old_key)
            normalized.setdefault(new_key, value)
    return normalized


def normalize_user_record(record: dict[str, Any]) -> dict[str, Any]:
    """Return *record* with legacy user keys renamed; current keys win."""
    return _rename_keys(record, _LEGACY_USER_KEYS)


def normalize_task_record(record: dict[str, Any]) -> dict[str, Any]:
    """Return *record* with legacy task keys renamed; current keys win."""
    return _rename_keys(record, _LEGACY_TASK_KEYS)


@dataclass
class User:
    """
    A registered user.

    Attributes:
        id: Integer identifier, assigned as ``max + 1`` at registration.
        username: Unique, case-sensitive login name.
        password_hash: Salted hash of the user's password.
    """

    id: int
    username: str
    password_hash: str

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> User:
        # ``password`` is the key used by stores written before hashes were salted.
        password_hash = record.get("passwordHash", record.get("password", ""))
        return cls(
            id=int(record["id"]),
            username=str(record["username"]),
            password_hash=str(password_hash),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "passwordHash": self.password_hash,
        }

    def to_dict(self) -> dict[str, Any]:
        """
        Return a user-safe dictionary representation.

        The password hash is excluded so this output can be returned
        directly in JSON API responses.
        """
        return {"id": self.id, "username": self.username}

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.username}>"


@dataclass
class Task:
    """
    A to-do item owned by a single user.

    Attributes:
        id: Integer identifier, unique within the task file.
        text: Free-form description of the task.
        status: Current status, normally a ``TaskStatus`` value.
        user_id: Id of the owning user.
    """

    id: int
    text: str
    status: str
    user_id: int

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Task:
        return cls(
            id=int(record["id"]),
            text=str(record.get("text", "")),
            status=str(record.get("status", TaskStatus.OPEN.value)),
            user_id=int(record["userId"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "status": self.status,
            "userId": self.user_id,
        }

    def __repr__(self) -> str:
        return f"<Task {self.id}: {self.text}>"
