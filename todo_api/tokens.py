"""
JWT creation and verification.

Bearer credentials are JSON Web Tokens signed with RS256: only the
application holding the private key can issue them, while verification
needs the public key alone.

Token structure (claims):
    - ``sub``      -- the user id as a string (RFC 7519 subject).
    - ``user_id``  -- the same id as an integer, for convenience.
    - ``username`` -- human-readable identifier of the user.
    - ``iss`` / ``aud`` -- fixed issuer and audience strings.
    - ``iat``      -- issued-at timestamp (UTC epoch seconds).
    - ``exp``      -- expiration timestamp (UTC epoch seconds).

Key Concepts Demonstrated:
- RS256 asymmetric signing with PyJWT
- Canonical JWT claims (iss, aud, iat, exp) and custom claims
- Required-claim and claim-type validation on decode
- Keys injected from configuration, never embedded in code
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from .models import User

logger = logging.getLogger(__name__)

ALGORITHM = "RS256"
DEFAULT_ISSUER = "TodoApi"
DEFAULT_AUDIENCE = "TodoApi"
DEFAULT_EXPIRY_HOURS = 24
DEFAULT_LEEWAY_SECONDS = 30
REQUIRED_TOKEN_CLAIMS = ["sub", "user_id", "username", "iss", "aud", "iat", "exp"]


def create_token(
    user_id: int,
    username: str,
    private_key: str,
    expiry_hours: int = DEFAULT_EXPIRY_HOURS,
    issuer: str = DEFAULT_ISSUER,
    audience: str = DEFAULT_AUDIENCE,
) -> str:
    """
    Create an RS256-signed JWT containing the caller's identity.

    Args:
        user_id: Id of the authenticated user.  Must be a positive integer.
        username: Login name of the user.  Must be a non-empty string.
        private_key: The RSA private key in PEM format.
        expiry_hours: Number of hours from *now* until the token expires.
        issuer: Value of the ``iss`` claim.
        audience: Value of the ``aud`` claim.

    Returns:
        A compact JWS string (``header.payload.signature``).

    Raises:
        ValueError: If *user_id* is not positive or *username* is blank.
    """
    if int(user_id) <= 0:
        raise ValueError("user_id must be a positive integer")
    if not isinstance(username, str) or not username.strip():
        raise ValueError("username must be a non-empty string")

    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(hours=int(expiry_hours))

    payload: dict[str, Any] = {
        "sub": str(int(user_id)),
        "user_id": int(user_id),
        "username": username,
        "iss": issuer,
        "aud": audience,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, private_key, algorithm=ALGORITHM)


def verify_token(
    token: str,
    public_key: str,
    issuer: str = DEFAULT_ISSUER,
    audience: str = DEFAULT_AUDIENCE,
    leeway: int = DEFAULT_LEEWAY_SECONDS,
) -> dict[str, Any] | None:
    """
    Decode and validate a JWT, returning the payload on success.

    Checks the RS256 signature, expiry (with *leeway* seconds of clock
    skew), issuer, audience and presence of every required claim, then
    makes sure ``user_id`` is a positive integer that agrees with ``sub``
    and ``username`` is a non-empty string.

    Returns:
        The decoded payload, or ``None`` if verification fails for any
        reason.
    """
    try:
        decoded = jwt.decode(
            token,
            public_key,
            algorithms=[ALGORITHM],
            issuer=issuer,
            audience=audience,
            options={"require": REQUIRED_TOKEN_CLAIMS},
            leeway=leeway,
        )
    except jwt.InvalidTokenError as exc:
        logger.debug("Rejected token: %s", exc)
        return None

    user_id = decoded.get("user_id")
    username = decoded.get("username")

    if isinstance(user_id, bool) or not isinstance(user_id, int) or user_id <= 0:
        return None
    if decoded.get("sub") != str(user_id):
        return None
    if not isinstance(username, str) or not username.strip():
        return None
    return decoded


class TokenIssuer:
    """
    Issues and verifies bearer tokens with one configured key pair.

    Built once per application from its configuration and shared by the
    login route and the auth guard.
    """

    def __init__(
        self,
        private_key: str,
        public_key: str,
        *,
        issuer: str = DEFAULT_ISSUER,
        audience: str = DEFAULT_AUDIENCE,
        expiry_hours: int = DEFAULT_EXPIRY_HOURS,
        leeway_seconds: int = DEFAULT_LEEWAY_SECONDS,
    ) -> None:
        self.private_key = private_key
        self.public_key = public_key
        self.issuer = issuer
        self.audience = audience
        self.expiry_hours = expiry_hours
        self.leeway_seconds = leeway_seconds

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> TokenIssuer:
        return cls(
            config["JWT_PRIVATE_KEY"],
            config["JWT_PUBLIC_KEY"],
            issuer=config.get("JWT_ISSUER", DEFAULT_ISSUER),
            audience=config.get("JWT_AUDIENCE", DEFAULT_AUDIENCE),
            expiry_hours=int(config.get("JWT_EXPIRY_HOURS", DEFAULT_EXPIRY_HOURS)),
            leeway_seconds=int(
                config.get("JWT_CLOCK_SKEW_SECONDS", DEFAULT_LEEWAY_SECONDS)
            ),
        )

    def issue(self, user: User) -> str:
        return create_token(
            user_id=user.id,
            username=user.username,
            private_key=self.private_key,
            expiry_hours=self.expiry_hours,
            issuer=self.issuer,
            audience=self.audience,
        )

    def verify(self, token: str) -> dict[str, Any] | None:
        """Return ``{"user_id", "username"}`` for a valid token, else ``None``."""
        payload = verify_token(
            token,
            self.public_key,
            issuer=self.issuer,
            audience=self.audience,
            leeway=self.leeway_seconds,
        )
        if payload is None:
            return None
        return {"user_id": payload["user_id"], "username": payload["username"]}
