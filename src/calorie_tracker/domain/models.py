"""Domain models for the calorie tracker."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the Users table."""

    user_id: str
    created_at: datetime | None
