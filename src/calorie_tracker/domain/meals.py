"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class MealType(Enum):
    """Closed set of meal categories used for sub-aggregation."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: str | None) -> "MealType":
        """Normalize a stored meal type string, ignoring case."""
        if not raw:
            return cls.UNKNOWN
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class MealRecord:
    """One logged meal as stored in the Output table."""

    user_id: str
    meal_type: str
    calories: int | None
    created_at: datetime
    meal_text: str | None = None
    id: int | None = None
