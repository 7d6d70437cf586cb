"""Domain models for calorie statistics."""

from dataclasses import dataclass, field
from datetime import date

from calorie_tracker.domain.meals import MealType


@dataclass
class MealTypeTotals:
    """Calories per meal type for a single day."""

    breakfast: int = 0
    lunch: int = 0
    dinner: int = 0

    def add(self, meal_type: MealType, calories: int) -> None:
        """Add calories to the bucket for a known meal type."""
        if meal_type is MealType.BREAKFAST:
            self.breakfast += calories
        elif meal_type is MealType.LUNCH:
            self.lunch += calories
        elif meal_type is MealType.DINNER:
            self.dinner += calories

    @property
    def total(self) -> int:
        return self.breakfast + self.lunch + self.dinner

    def as_dict(self) -> dict[str, int]:
        return {
            "breakfast": self.breakfast,
            "lunch": self.lunch,
            "dinner": self.dinner,
        }


@dataclass(frozen=True)
class RollingWindowEntry:
    """One bar of the 7-day calorie chart."""

    label: str
    day: date
    total: int


@dataclass(frozen=True)
class DailySummary:
    """Aggregated totals for a user anchored on a reference date."""

    reference_date: date
    daily_totals: dict[date, int] = field(default_factory=dict)
    meal_type_totals: dict[date, MealTypeTotals] = field(default_factory=dict)
    rolling_window: list[RollingWindowEntry] = field(default_factory=list)

    @property
    def today(self) -> MealTypeTotals:
        """Per-meal totals for the reference date, zeros when nothing logged."""
        return self.meal_type_totals.get(self.reference_date) or MealTypeTotals()
