"""Supabase-backed user repository."""

from dataclasses import dataclass

from supabase import Client

from photo_gallery.adapters.supabase_rows import now_iso, optional_str, parse_timestamp
from photo_gallery.domain.models import UserRecord
from photo_gallery.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def list_users(self) -> list[UserRecord]:
        """Return all users ordered by id."""
        response = self.client.table("users").select("*").order("id").execute()
        return [_parse_user(row) for row in response.data or []]

    def get_user(self, user_id: int) -> UserRecord | None:
        """Return a user by id, if present."""
        return self._first("id", user_id)

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user with this username, if present."""
        return self._first("username", username)

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with this email, if present."""
        return self._first("email", email)

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        """Create a new user row and return it."""
        response = self.client.table("users").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def update_user(self, user_id: int, payload: dict[str, object]) -> UserRecord | None:
        """Update a user row and return it."""
        response = (
            self.client.table("users")
            .update({**payload, "updated_at": now_iso()})
            .eq("id", user_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def delete_user(self, user_id: int) -> bool:
        """Delete a user row."""
        response = self.client.table("users").delete().eq("id", user_id).execute()
        return bool(response.data)

    def count_users(self) -> int:
        """Return the number of users."""
        response = self.client.table("users").select("id", count="exact").execute()
        return response.count or 0

    def _first(self, column: str, value: object) -> UserRecord | None:
        response = (
            self.client.table("users")
            .select("*")
            .eq(column, value)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])


def _parse_user(row: dict[str, object]) -> UserRecord:
    """Parse a users row into a domain model."""
    return UserRecord(
        id=int(row["id"]),
        username=str(row["username"]),
        name=optional_str(row.get("name")),
        email=optional_str(row.get("email")),
        password_hash=str(row.get("password_hash", "")),
        role=str(row.get("role", "user")),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
