"""Meal logging service."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from calorie_tracker.domain.meals import MealRecord


class InvalidMealError(ValueError):
    """Raised when a meal is missing required fields."""


class MealRepository(Protocol):
    """Persistence interface for logged meals."""

    def create_meal(
        self, user_id: str, meal_text: str, meal_type: str, calories: int
    ) -> MealRecord:
        """Insert a meal and return the stored record."""

    def list_meals(
        self, user_id: str, start: datetime | None, end: datetime | None
    ) -> list[MealRecord]:
        """Return a user's meals, newest first."""


@dataclass
class MealLogService:
    """Service that validates and persists meals."""

    repository: MealRepository

    def save_meal(
        self,
        user_id: str | None,
        meal_text: str | None,
        meal_type: str | None,
        calories: object,
    ) -> MealRecord:
        """Validate a meal and persist it."""
        if not user_id or not meal_text or not meal_type or calories is None:
            raise InvalidMealError(
                "Missing required fields: userId, meal, mealType, calories"
            )
        if isinstance(calories, bool) or not isinstance(calories, int):
            raise InvalidMealError("Calories must be an integer")
        if calories < 0:
            raise InvalidMealError("Calories must not be negative")
        return self.repository.create_meal(user_id, meal_text, meal_type, calories)

    def list_meals(
        self,
        user_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[MealRecord]:
        """Return meals for a user, optionally bounded by creation time."""
        return self.repository.list_meals(user_id, start, end)
