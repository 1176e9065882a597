"""
Per-user task management.

All tasks share one JSON store file.  Every operation loads the whole
collection, filters it by owner, and (for mutations) writes the whole
collection back inside a store transaction.  A task that exists but
belongs to another user is reported exactly like a missing one.
"""

from __future__ import annotations

import logging
from typing import Any

from ..errors import NotFoundError
from ..models import Task, TaskStatus
from ..store import JsonStore, next_id

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"


def _find_owned(records: list[dict[str, Any]], user_id: int, task_id: int) -> dict[str, Any]:
    for record in records:
        if record.get("id") == task_id and record.get("userId") == user_id:
            return record
    logger.warning("Task %s not found for user %s", task_id, user_id)
    raise NotFoundError(TASK_NOT_FOUND)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class TaskService:
    """CRUD and status toggling for tasks, scoped to the owning user."""

    def __init__(self, store: JsonStore) -> None:
        self.store = store

    def list_tasks(self, user_id: int) -> list[Task]:
        """Return the caller's tasks in store (insertion) order."""
        tasks = [
            Task.from_record(record)
            for record in self.store.read()
            if record.get("userId") == user_id
        ]
        logger.info("Retrieved %d tasks for user %s", len(tasks), user_id)
        return tasks

    def add(self, user_id: int, text: str) -> Task:
        """
        Create a task owned by *user_id*.

        New tasks always start ``open`` and receive ``max id + 1``.  Any
        text is accepted, including an empty string.
        """
        text = _as_text(text)
        with self.store.transaction() as records:
            task = Task(
                id=next_id(records),
                text=text,
                status=TaskStatus.OPEN.value,
                user_id=user_id,
            )
            records.append(task.to_dict())

        logger.info("Added task %s for user %s", task.id, user_id)
        return task

    def edit(
        self,
        user_id: int,
        task_id: int,
        text: str | None = None,
        status: str | None = None,
    ) -> Task:
        """
        Overwrite the text and/or status of an owned task.

        Fields passed as ``None`` keep their current value.  Supplied values
        are stored as given, so a status outside the toggle cycle is kept
        and later passed through by :meth:`toggle_status`.

        Raises:
            NotFoundError: If the caller owns no task with *task_id*.
        """
        with self.store.transaction() as records:
            record = _find_owned(records, user_id, task_id)
            if text is not None:
                record["text"] = _as_text(text)
            if status is not None:
                record["status"] = _as_text(status)
            task = Task.from_record(record)

        logger.info("Edited task %s for user %s", task_id, user_id)
        return task

    def delete(self, user_id: int, task_id: int) -> None:
        with self.store.transaction() as records:
            record = _find_owned(records, user_id, task_id)
            records.remove(record)

        logger.info("Deleted task %s for user %s", task_id, user_id)

    def toggle_status(self, user_id: int, task_id: int) -> Task:
        """Advance an owned task to the next status in the cycle."""
        with self.store.transaction() as records:
            record = _find_owned(records, user_id, task_id)
            current = record.get("status", TaskStatus.OPEN.value)
            record["status"] = TaskStatus.next_status(current)
            task = Task.from_record(record)

        logger.info(
            "Toggled status of task %s to %s for user %s", task_id, task.status, user_id
        )
        return task
