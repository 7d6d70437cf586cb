"""User registration and login."""

import logging
from dataclasses import dataclass
from typing import Protocol

from calorie_tracker.domain.models import UserRecord

MIN_USER_ID_LENGTH = 3

logger = logging.getLogger(__name__)


class InvalidUserIdError(ValueError):
    """Raised when a user id is missing or too short."""


class UserAlreadyExistsError(Exception):
    """Raised when registering an id that is already taken."""


class UserNotFoundError(Exception):
    """Raised when logging in with an unknown id."""


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: str) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def create_user(self, user_id: str) -> UserRecord:
        """Create and return a new user record."""

    def ping(self) -> None:
        """Issue a lightweight query, raising if the store is unreachable."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    def register(self, raw_user_id: object) -> UserRecord:
        """Create a user for a new id."""
        user_id = normalize_user_id(raw_user_id)
        if self.repository.get_user(user_id) is not None:
            raise UserAlreadyExistsError(user_id)
        return self.repository.create_user(user_id)

    def login(self, raw_user_id: object) -> UserRecord:
        """Return the existing user for an id."""
        user_id = normalize_user_id(raw_user_id)
        existing = self.repository.get_user(user_id)
        if existing is None:
            raise UserNotFoundError(user_id)
        return existing

    def is_store_reachable(self) -> bool:
        try:
            self.repository.ping()
        except Exception:
            logger.warning("User store probe failed", exc_info=True)
            return False
        return True


def normalize_user_id(raw_user_id: object) -> str:
    """Trim a user id and check its minimum length."""
    if not isinstance(raw_user_id, str):
        raise InvalidUserIdError("User ID must be a string")
    user_id = raw_user_id.strip()
    if len(user_id) < MIN_USER_ID_LENGTH:
        raise InvalidUserIdError(
            f"User ID must be at least {MIN_USER_ID_LENGTH} characters"
        )
    return user_id
