"""User-related business logic."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from globetrotter.domain.errors import (
    InvalidUsernameError,
    UsernameTakenError,
    UserNotFoundError,
)
from globetrotter.domain.models import UserRecord


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user for a username, if present."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""

    def create_user(self, username: str) -> UserRecord:
        """Create and return a new user record.

        Raises UsernameTakenError when the username is already stored.
        """


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    def create_user(self, username: str) -> UserRecord:
        """Create a user for a new username."""
        cleaned = username.strip()
        if not cleaned:
            raise InvalidUsernameError()
        if self.repository.get_by_username(cleaned) is not None:
            raise UsernameTakenError(f"Username already exists: {cleaned}")
        return self.repository.create_user(cleaned)

    def get_user(self, username: str) -> UserRecord:
        """Return the user for a username."""
        user = self.repository.get_by_username(username.strip())
        if user is None:
            raise UserNotFoundError(f"User not found: {username}")
        return user
