"""Password hashing helpers."""

from __future__ import annotations

import base64
import hashlib
import hmac

from werkzeug.security import check_password_hash, generate_password_hash

DEFAULT_HASH_METHOD = "scrypt"


def hash_password(password: str, method: str = DEFAULT_HASH_METHOD) -> str:
    """
    Hash a plain-text password for storage.

    Uses Werkzeug's ``generate_password_hash``, which adds a random salt and
    encodes the method and its parameters into the result, so hashes made
    with different methods verify side by side.
    """
    return generate_password_hash(password, method=method)


def _legacy_hash(password: str) -> str:
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")


def is_legacy_hash(stored_hash: str) -> bool:
    """Return True for unsalted base64 SHA-256 digests from older stores."""
    return bool(stored_hash) and "$" not in stored_hash


def verify_password(password: str, stored_hash: str | None) -> bool:
    """
    Check a plain-text password against a stored hash.

    Returns:
        ``True`` if the password matches, ``False`` otherwise (including
        for an empty or unrecognised stored value).
    """
    stored = stored_hash or ""
    if not stored:
        return False
    if is_legacy_hash(stored):
        return hmac.compare_digest(
            _legacy_hash(password).encode("ascii"), stored.encode("utf-8")
        )
    try:
        return check_password_hash(stored, password)
    except ValueError:
        return False


def needs_rehash(stored_hash: str | None) -> bool:
    """Return True when *stored_hash* should be replaced by a salted hash."""
    return is_legacy_hash(stored_hash or "")
