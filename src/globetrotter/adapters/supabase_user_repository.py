"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from globetrotter.domain.errors import StoreUnavailableError, UsernameTakenError
from globetrotter.domain.models import UserRecord
from globetrotter.services.users import UserRepository

_UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user for a username, if present."""
        response = (
            self.client.table("users")
            .select("id, username, created_at")
            .eq("username", username)
            .limit(1)
            .execute()
        )
        if response.data:
            return _to_user(response.data[0])
        return None

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""
        response = (
            self.client.table("users")
            .select("id, username, created_at")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _to_user(response.data[0])
        return None

    def create_user(self, username: str) -> UserRecord:
        """Create a new user row and return it."""
        try:
            response = (
                self.client.table("users").insert({"username": username}).execute()
            )
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                message = f"Username already exists: {username}"
                raise UsernameTakenError(message) from exc
            raise
        if not response.data:
            raise StoreUnavailableError("Failed to create user in Supabase")
        return _to_user(response.data[0])


def _to_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=UUID(str(row["id"])),
        username=str(row["username"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
