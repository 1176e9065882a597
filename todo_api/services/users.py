"""
User registration and login.

Users live in a single JSON store file.  Registration checks the username
against every stored user, assigns the next id and stores a salted
password hash; login looks the user up and returns a signed bearer token.
"""

from __future__ import annotations

import logging

from ..errors import AuthError, ConflictError, ValidationError
from ..models import User
from ..security import DEFAULT_HASH_METHOD, hash_password, needs_rehash, verify_password
from ..store import JsonStore, next_id
from ..tokens import TokenIssuer

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


def _is_blank(value: object) -> bool:
    return not isinstance(value, str) or not value.strip()


class UserService:
    """
    Registration and login against the users store.

    Args:
        store: Store holding the user records.
        tokens: Issuer used to sign tokens on successful login.
        hash_method: Werkzeug method used for new password hashes.
    """

    def __init__(
        self,
        store: JsonStore,
        tokens: TokenIssuer,
        hash_method: str = DEFAULT_HASH_METHOD,
    ) -> None:
        self.store = store
        self.tokens = tokens
        self.hash_method = hash_method

    def register(self, username: str, password: str) -> User:
        """
        Create a new user.

        Raises:
            ValidationError: If the username or password is missing or blank.
            ConflictError: If the username is already taken (exact,
                case-sensitive match).
        """
        if _is_blank(username) or _is_blank(password):
            logger.warning("Registration attempt with missing username or password")
            raise ValidationError("Username and password are required")

        logger.info("Registering new user with username %s", username)
        with self.store.transaction() as records:
            if any(record.get("username") == username for record in records):
                logger.warning("Username %s already exists", username)
                raise ConflictError("Username already exists")

            user = User(
                id=next_id(records),
                username=username,
                password_hash=hash_password(password, method=self.hash_method),
            )
            records.append(user.to_record())

        logger.info("Registered user %s with ID %s", user.username, user.id)
        return user

    def find_by_username(self, username: str) -> User | None:
        for record in self.store.read():
            if record.get("username") == username:
                return User.from_record(record)
        return None

    def login(self, username: str, password: str) -> str:
        """
        Authenticate a user and issue a token.

        Unknown usernames and wrong passwords raise the same
        :class:`AuthError` so callers cannot tell them apart.
        """
        if _is_blank(username) or not isinstance(password, str):
            logger.warning("Login attempt with missing credentials")
            raise AuthError(INVALID_CREDENTIALS)

        logger.info("Login attempt for username %s", username)
        user = self.find_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Invalid login attempt for username %s", username)
            raise AuthError(INVALID_CREDENTIALS)

        if needs_rehash(user.password_hash):
            self._upgrade_hash(user, password)

        token = self.tokens.issue(user)
        logger.info("Successful login for user %s with ID %s", user.username, user.id)
        return token

    def _upgrade_hash(self, user: User, password: str) -> None:
        """Replace a legacy unsalted digest with a salted hash."""
        new_hash = hash_password(password, method=self.hash_method)
        with self.store.transaction() as records:
            for record in records:
                if record.get("id") == user.id:
                    record.pop("password", None)
                    record["passwordHash"] = new_hash
        user.password_hash = new_hash
        logger.info("Upgraded password hash for user %s", user.id)
