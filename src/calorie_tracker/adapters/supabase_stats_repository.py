"""Supabase repository for meal statistics."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from calorie_tracker.adapters.supabase_meal_repository import (
    COLUMN_CALORIES,
    COLUMN_MEAL_TYPE,
    MEALS_TABLE,
    parse_meal_row,
)
from calorie_tracker.domain.meals import MealRecord
from calorie_tracker.services.stats import StatsRepository


@dataclass
class SupabaseStatsRepository(StatsRepository):
    """Supabase implementation for stats queries."""

    client: Client

    def list_records_since(self, user_id: str, start: datetime) -> list[MealRecord]:
        """Return meal records created at or after ``start``, oldest first."""
        response = (
            self.client.table(MEALS_TABLE)
            .select(f'userid, created_at, {COLUMN_CALORIES}, "{COLUMN_MEAL_TYPE}"')
            .eq("userid", user_id)
            .gte("created_at", start.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [parse_meal_row(row) for row in response.data or []]
