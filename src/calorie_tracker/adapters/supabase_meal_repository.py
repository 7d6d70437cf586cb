"""Supabase repository for logged meals."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from calorie_tracker.domain.meals import MealRecord
from calorie_tracker.services.meals import MealRepository

MEALS_TABLE = "Output"
COLUMN_MEAL = "Meal"
COLUMN_MEAL_TYPE = "Type of Meal"
COLUMN_CALORIES = "Calories"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for the Output table."""

    client: Client

    def create_meal(
        self, user_id: str, meal_text: str, meal_type: str, calories: int
    ) -> MealRecord:
        """Insert a meal row and return it."""
        response = (
            self.client.table(MEALS_TABLE)
            .insert(
                {
                    "userid": user_id,
                    COLUMN_MEAL: meal_text,
                    COLUMN_MEAL_TYPE: meal_type,
                    COLUMN_CALORIES: calories,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save meal to database")
        return parse_meal_row(response.data[0])

    def list_meals(
        self, user_id: str, start: datetime | None, end: datetime | None
    ) -> list[MealRecord]:
        """Return meals for a user, newest first."""
        query = (
            self.client.table(MEALS_TABLE)
            .select("*")
            .eq("userid", user_id)
            .order("created_at", desc=True)
        )
        if start is not None:
            query = query.gte("created_at", start.isoformat())
        if end is not None:
            query = query.lte("created_at", end.isoformat())
        response = query.execute()
        return [parse_meal_row(row) for row in response.data or []]


def parse_meal_row(row: dict[str, object]) -> MealRecord:
    """Convert an Output row into a meal record, tolerating bad fields."""
    meal_text = row.get(COLUMN_MEAL)
    row_id = row.get("id")
    return MealRecord(
        user_id=str(row.get("userid", "")),
        meal_type=str(row.get(COLUMN_MEAL_TYPE) or ""),
        calories=_parse_calories(row.get(COLUMN_CALORIES)),
        created_at=_parse_timestamp(row.get("created_at")),
        meal_text=str(meal_text) if meal_text is not None else None,
        id=row_id if isinstance(row_id, int) else None,
    )


def _parse_calories(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return round(value)
    if isinstance(value, str):
        try:
            return round(float(value))
        except ValueError:
            return None
    return None


def _parse_timestamp(value: object) -> datetime:
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            pass
    return datetime.min.replace(tzinfo=UTC)
