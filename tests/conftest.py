"""
Shared pytest fixtures for the to-do API test suite.

Provides the Flask application, HTTP client, services, JWT tokens and data
factories used by unit, integration, security, concurrency and contract
suites.  Every test gets its own temporary data directory, so the JSON
store files never leak between tests.

Key SDET Concepts Demonstrated:
- Function-scoped app fixtures bound to a per-test ``tmp_path``
- Factory pattern (user_factory, task_factory) for flexible test data
- Shared JWT token generation via the test-helpers module
- Environment variable overrides for deterministic test configuration
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from faker import Faker

os.environ["FLASK_ENV"] = "testing"

from tests.helpers import (  # noqa: E402
    TEST_PRIVATE_KEY,
    TEST_PUBLIC_KEY,
    auth_headers,
    create_test_token,
)

os.environ["TEST_JWT_PRIVATE_KEY"] = TEST_PRIVATE_KEY
os.environ["TEST_JWT_PUBLIC_KEY"] = TEST_PUBLIC_KEY

from todo_api import create_app  # noqa: E402
from todo_api.models import (  # noqa: E402
    Task,
    TaskStatus,
    User,
    normalize_task_record,
    normalize_user_record,
)
from todo_api.services import EXTENSION_KEY, ServiceRegistry  # noqa: E402
from todo_api.services.tasks import TaskService  # noqa: E402
from todo_api.services.users import UserService  # noqa: E402
from todo_api.store import JsonStore  # noqa: E402
from todo_api.tokens import TokenIssuer  # noqa: E402

fake = Faker()

TEST_HASH_METHOD = "pbkdf2:sha256:1000"


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def data_dir(tmp_path) -> Path:
    """Directory holding the users/ and tasks/ store files for one test."""
    return tmp_path / "db"


@pytest.fixture
def app(data_dir):
    """
    Provide a Flask application bound to a fresh data directory.

    The app is cheap to build (no database), so each test gets its own
    instance and its own store files.
    """
    application = create_app("testing", {"DATA_DIR": str(data_dir)})
    yield application


@pytest.fixture
def client(app):
    """Provide a Flask test client scoped to a single test function."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def services(app) -> ServiceRegistry:
    """The service registry the application under test is using."""
    return app.extensions[EXTENSION_KEY]


# -----------------------------------------------------------------------------
# Stand-alone Service Fixtures (no Flask)
# -----------------------------------------------------------------------------


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(TEST_PRIVATE_KEY, TEST_PUBLIC_KEY)


@pytest.fixture
def users_store(tmp_path) -> JsonStore:
    return JsonStore(tmp_path / "users" / "users.json", normalize=normalize_user_record)


@pytest.fixture
def tasks_store(tmp_path) -> JsonStore:
    return JsonStore(tmp_path / "tasks" / "tasks.json", normalize=normalize_task_record)


@pytest.fixture
def user_service(users_store, token_issuer) -> UserService:
    return UserService(users_store, token_issuer, hash_method=TEST_HASH_METHOD)


@pytest.fixture
def task_service(tasks_store) -> TaskService:
    return TaskService(tasks_store)


# -----------------------------------------------------------------------------
# Token Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def test_token() -> str:
    """Generate a valid JWT for user_id=1 ('user_one')."""
    return create_test_token(user_id=1, username="user_one")


@pytest.fixture
def second_user_token() -> str:
    """Generate a valid JWT for user_id=2 ('user_two')."""
    return create_test_token(user_id=2, username="user_two")


@pytest.fixture
def api_headers(test_token) -> dict[str, str]:
    return auth_headers(test_token)


@pytest.fixture
def second_user_headers(second_user_token) -> dict[str, str]:
    return auth_headers(second_user_token)


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def user_factory(services) -> Callable[..., User]:
    """
    Factory that registers users through the application's UserService.

    Usernames default to unique Faker values; the password defaults to
    ``StrongPass123!``.
    """

    def _create_user(
        username: str | None = None,
        password: str = "StrongPass123!",
    ) -> User:
        return services.users.register(username or fake.unique.user_name(), password)

    return _create_user


@pytest.fixture
def task_factory(services) -> Callable[..., Task]:
    """
    Factory that creates tasks through the application's TaskService.

    A non-default ``status`` is applied with an edit after creation.
    """

    def _create_task(
        *,
        user_id: int = 1,
        text: str | None = None,
        status: str = TaskStatus.OPEN.value,
    ) -> Task:
        task = services.tasks.add(user_id, text or fake.sentence(nb_words=4))
        if status != TaskStatus.OPEN.value:
            task = services.tasks.edit(user_id, task.id, status=status)
        return task

    return _create_task


@pytest.fixture
def seed_tasks(services) -> Callable[[list[dict[str, Any]]], None]:
    """Write raw task records straight into the application's task file."""

    def _seed(records: list[dict[str, Any]]) -> None:
        services.tasks.store.save_all(records)

    return _seed


@pytest.fixture
def sample_task(task_factory) -> Task:
    """A single open task owned by user_id=1 with known text."""
    return task_factory(user_id=1, text="Sample task")
