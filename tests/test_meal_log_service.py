"""Tests for meal log service."""

from datetime import UTC, datetime, timedelta

import pytest

from calorie_tracker.services.meals import InvalidMealError, MealLogService
from tests.conftest import InMemoryMealRepository


def test_save_meal_persists_record() -> None:
    repository = InMemoryMealRepository()
    service = MealLogService(repository)

    record = service.save_meal("alice", "2 eggs and toast", "breakfast", 350)

    assert record.calories == 350
    assert record.meal_type == "breakfast"
    assert repository.records == [record]


def test_save_meal_accepts_unknown_meal_type() -> None:
    record = MealLogService(InMemoryMealRepository()).save_meal(
        "alice", "apple", "snack", 95
    )

    assert record.meal_type == "snack"


def test_save_meal_accepts_zero_calories() -> None:
    record = MealLogService(InMemoryMealRepository()).save_meal(
        "alice", "water", "lunch", 0
    )

    assert record.calories == 0


@pytest.mark.parametrize(
    ("user_id", "meal", "meal_type", "calories"),
    [
        (None, "toast", "breakfast", 100),
        ("alice", "", "breakfast", 100),
        ("alice", "toast", None, 100),
        ("alice", "toast", "breakfast", None),
        ("alice", "toast", "breakfast", -5),
        ("alice", "toast", "breakfast", True),
        ("alice", "toast", "breakfast", "100"),
    ],
)
def test_save_meal_rejects_invalid_input(
    user_id: str | None, meal: str, meal_type: str | None, calories: object
) -> None:
    repository = InMemoryMealRepository()

    with pytest.raises(InvalidMealError):
        MealLogService(repository).save_meal(user_id, meal, meal_type, calories)
    assert repository.records == []


def test_list_meals_passes_bounds_and_orders_newest_first() -> None:
    repository = InMemoryMealRepository()
    service = MealLogService(repository)
    first = service.save_meal("alice", "oats", "breakfast", 300)
    second = service.save_meal("alice", "salad", "lunch", 450)
    service.save_meal("bob", "pizza", "dinner", 900)
    start = datetime.now(tz=UTC) - timedelta(days=1)

    meals = service.list_meals("alice", start=start)

    assert repository.last_bounds == (start, None)
    assert [meal.id for meal in meals] == [second.id, first.id]
