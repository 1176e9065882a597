"""
Security tests for mass-assignment hardening on task endpoints.

Sends requests that include server-controlled fields (id, userId, status)
alongside legitimate task data and verifies the API ignores them rather
than binding them to the stored record (OWASP A04 - Insecure Design).

Key SDET Concepts Demonstrated:
- Adversarial payload construction with protected fields
- Positive-negative hybrid assertions (200 success but fields ignored)
- Ownership-invariant verification on the update path
"""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.security


def test_add_task_ignores_protected_fields(client, api_headers):
    """Task creation must ignore client-supplied id, owner and status."""
    # Arrange
    payload = {
        "id": 999999,
        "userId": 424242,
        "status": "completed",
        "text": "Mass assignment attempt",
        "isAdmin": True,
    }

    # Act
    response = client.post("/tasks/add", json=payload, headers=api_headers)

    # Assert
    assert response.status_code == 200
    body = response.get_json()
    assert body == {"id": 1, "text": "Mass assignment attempt", "status": "open", "userId": 1}


def test_edit_task_cannot_reassign_owner_or_id(client, api_headers, second_user_headers, sample_task):
    """Task update must not move the task to another user or renumber it."""
    # Arrange
    payload = {"id": 77, "userId": 2, "text": "Still mine"}

    # Act
    response = client.put(f"/tasks/edit/{sample_task.id}", json=payload, headers=api_headers)

    # Assert
    assert response.status_code == 200
    body = response.get_json()
    assert body["id"] == sample_task.id
    assert body["userId"] == 1
    assert client.get("/tasks/list/2", headers=second_user_headers).get_json() == []


def test_register_ignores_client_supplied_id(client):
    """Registration assigns ids server-side."""
    # Act
    response = client.post(
        "/users/register",
        json={"id": 50, "username": "id_setter", "password": "StrongPass123!"},
    )

    # Assert
    assert response.status_code == 200
    assert response.get_json()["id"] == 1
