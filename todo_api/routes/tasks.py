"""
Task API endpoints.

Every endpoint requires a Bearer token (``require_auth``) and operates
only on the tasks owned by the authenticated user.

Endpoints:
    GET    /tasks/list/<user_id>  - List the caller's tasks
    POST   /tasks/add             - Create a task
    PUT    /tasks/edit/<id>       - Overwrite text and/or status
    DELETE /tasks/delete/<id>     - Delete a task
    PUT    /tasks/toggle/<id>     - Advance the status cycle
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, Response, jsonify, request

from ..auth import current_user_id, require_auth
from ..errors import ValidationError
from ..services import get_services

logger = logging.getLogger(__name__)

tasks_bp = Blueprint("tasks", __name__)


def _json_body(*, required: bool) -> dict[str, Any]:
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    if required:
        raise ValidationError("Request body must be a JSON object")
    return {}


@tasks_bp.route("/list/<user_id>", methods=["GET"])
@require_auth
def list_tasks(user_id: str) -> tuple[Response, int]:
    """
    List the caller's tasks in insertion order.

    The ``user_id`` path segment is kept for client compatibility and may
    be any string; the listed tasks always belong to the token's user.
    """
    caller_id = current_user_id()
    if user_id != str(caller_id):
        logger.debug("List path user %s differs from token user %s", user_id, caller_id)

    tasks = get_services().tasks.list_tasks(caller_id)
    return jsonify([task.to_dict() for task in tasks]), 200


@tasks_bp.route("/add", methods=["POST"])
@require_auth
def add_task() -> tuple[Response, int]:
    """
    Create a new task for the authenticated user.

    Only ``text`` is read from the body; id, owner and status are always
    assigned by the server.
    """
    data = _json_body(required=True)
    task = get_services().tasks.add(current_user_id(), data.get("text"))
    return jsonify(task.to_dict()), 200


@tasks_bp.route("/edit/<int:task_id>", methods=["PUT"])
@require_auth
def edit_task(task_id: int) -> tuple[Response, int]:
    """
    Overwrite the text and/or status of a task.

    Fields missing from the body keep their current value.

    Returns:
        200 with the updated task, 400 on invalid input, 404 if the caller
        owns no such task.
    """
    data = _json_body(required=True)
    task = get_services().tasks.edit(
        current_user_id(),
        task_id,
        text=data.get("text"),
        status=data.get("status"),
    )
    return jsonify(task.to_dict()), 200


@tasks_bp.route("/delete/<int:task_id>", methods=["DELETE"])
@require_auth
def delete_task(task_id: int) -> tuple[Response, int]:
    get_services().tasks.delete(current_user_id(), task_id)
    return jsonify({"message": "Task deleted successfully"}), 200


@tasks_bp.route("/toggle/<int:task_id>", methods=["PUT"])
@require_auth
def toggle_task(task_id: int) -> tuple[Response, int]:
    """Advance a task through ``open -> in-progress -> completed -> open``."""
    task = get_services().tasks.toggle_status(current_user_id(), task_id)
    return jsonify(task.to_dict()), 200
