"""Daily and weekly calorie aggregation.

Records are bucketed by the UTC calendar date of their ``created_at``
timestamp. Both functions are pure: they never perform I/O and never raise
on malformed records, which contribute zero calories instead.
"""

from collections.abc import Iterable
from datetime import UTC, date, datetime, timedelta

from calorie_tracker.domain.meals import MealRecord, MealType
from calorie_tracker.domain.stats import MealTypeTotals, RollingWindowEntry

WINDOW_DAYS = 7
TODAY_LABEL = "Today"
_WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def aggregate(
    records: Iterable[MealRecord],
) -> tuple[dict[date, int], dict[date, MealTypeTotals]]:
    """Sum calories per day and per meal type for the given records.

    Only days that occur in ``records`` are present in the result. Records
    whose meal type is not breakfast, lunch or dinner count toward the daily
    total but toward no meal type bucket.
    """
    daily_totals: dict[date, int] = {}
    meal_type_totals: dict[date, MealTypeTotals] = {}
    for record in records:
        day = bucket_day(record.created_at)
        calories = record.calories or 0
        daily_totals[day] = daily_totals.get(day, 0) + calories
        per_type = meal_type_totals.setdefault(day, MealTypeTotals())
        per_type.add(MealType.parse(record.meal_type), calories)
    return daily_totals, meal_type_totals


def build_rolling_window(
    daily_totals: dict[date, int], reference_date: date
) -> list[RollingWindowEntry]:
    """Return seven chart entries ending at ``reference_date``, oldest first."""
    window = []
    for offset in range(WINDOW_DAYS - 1, -1, -1):
        day = reference_date - timedelta(days=offset)
        window.append(
            RollingWindowEntry(
                label=_day_label(day, reference_date),
                day=day,
                total=daily_totals.get(day, 0),
            )
        )
    return window


def bucket_day(created_at: datetime) -> date:
    """Return the UTC calendar date used as the aggregation key."""
    if created_at.tzinfo is None:
        return created_at.date()
    return created_at.astimezone(UTC).date()


def _day_label(day: date, reference_date: date) -> str:
    if day == reference_date:
        return TODAY_LABEL
    return f"{_WEEKDAY_NAMES[day.weekday()]} {day.day}"
