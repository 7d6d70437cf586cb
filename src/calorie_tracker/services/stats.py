"""Statistics service for logged meals."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from calorie_tracker.domain.meals import MealRecord
from calorie_tracker.domain.stats import DailySummary
from calorie_tracker.services.aggregation import (
    WINDOW_DAYS,
    aggregate,
    bucket_day,
    build_rolling_window,
)


class StatsRepository(Protocol):
    """Persistence interface for meal statistics."""

    def list_records_since(self, user_id: str, start: datetime) -> list[MealRecord]:
        """Return a user's meal records created at or after ``start``."""


@dataclass
class StatsService:
    """Service for computing daily and weekly calorie totals."""

    repository: StatsRepository

    def get_daily_summary(
        self, user_id: str, now: datetime | None = None
    ) -> DailySummary:
        """Return daily, per-meal and rolling 7-day totals for a user."""
        current = now or datetime.now(tz=UTC)
        start = current - timedelta(days=WINDOW_DAYS)
        records = self.repository.list_records_since(user_id, start)
        daily_totals, meal_type_totals = aggregate(records)
        reference_date = bucket_day(current)
        return DailySummary(
            reference_date=reference_date,
            daily_totals=daily_totals,
            meal_type_totals=meal_type_totals,
            rolling_window=build_rolling_window(daily_totals, reference_date),
        )
