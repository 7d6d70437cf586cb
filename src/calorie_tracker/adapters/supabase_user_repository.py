"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from calorie_tracker.domain.models import UserRecord
from calorie_tracker.services.users import UserRepository

USERS_TABLE = "Users"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_user(self, user_id: str) -> UserRecord | None:
        """Return the user for an id, if present."""
        response = (
            self.client.table(USERS_TABLE)
            .select("userid, created_at")
            .eq("userid", user_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(self, user_id: str) -> UserRecord:
        """Create a new user row and return it."""
        response = (
            self.client.table(USERS_TABLE)
            .insert(
                {
                    "userid": user_id,
                    "created_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def ping(self) -> None:
        """Run a minimal query against the Users table."""
        self.client.table(USERS_TABLE).select("userid").limit(1).execute()


def _parse_user(row: dict[str, object]) -> UserRecord:
    created_raw = row.get("created_at")
    created_at = None
    if isinstance(created_raw, str) and created_raw:
        try:
            created_at = datetime.fromisoformat(created_raw)
        except ValueError:
            created_at = None
    return UserRecord(user_id=str(row["userid"]), created_at=created_at)
