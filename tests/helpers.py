"""Test helper functions used across the test suites."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from todo_api.keygen import generate_key_pair
from todo_api.tokens import DEFAULT_AUDIENCE, DEFAULT_ISSUER

DEFAULT_TEST_USER_ID = 1
DEFAULT_TEST_USERNAME = "test_user"

# Stable for one Python process: generated once on import, reused everywhere in tests.
TEST_PRIVATE_KEY, TEST_PUBLIC_KEY = generate_key_pair()


def generate_throwaway_key_pair() -> tuple[str, str]:
    """Generate a fresh RSA key pair for negative-path tests."""
    return generate_key_pair()


def token_claims(
    user_id: int = DEFAULT_TEST_USER_ID,
    username: str = DEFAULT_TEST_USERNAME,
    expired: bool = False,
) -> dict[str, Any]:
    """Build a valid claim set with a 1-hour expiry (or one that ended an hour ago)."""
    now = datetime.now(timezone.utc)
    expiry_time = now - timedelta(hours=1) if expired else now + timedelta(hours=1)
    return {
        "sub": str(int(user_id)),
        "user_id": int(user_id),
        "username": str(username),
        "iss": DEFAULT_ISSUER,
        "aud": DEFAULT_AUDIENCE,
        "iat": int(now.timestamp()),
        "exp": int(expiry_time.timestamp()),
    }


def create_test_token(
    user_id: int = DEFAULT_TEST_USER_ID,
    username: str = DEFAULT_TEST_USERNAME,
    private_key: str = TEST_PRIVATE_KEY,
    expired: bool = False,
) -> str:
    """Create a signed RS256 test token with required claims."""
    payload = token_claims(user_id=user_id, username=username, expired=expired)
    return jwt.encode(payload, private_key, algorithm="RS256")


def auth_headers(token: str) -> dict[str, str]:
    """Build common JSON API headers with bearer token auth."""
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
