"""Session-scoped dashboard state."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from calorie_tracker.domain.stats import (
    DailySummary,
    MealTypeTotals,
    RollingWindowEntry,
)
from calorie_tracker.services.aggregation import build_rolling_window
from calorie_tracker.services.stats import StatsService


def _utc_today() -> date:
    return datetime.now(tz=UTC).date()


@dataclass
class DashboardSession:
    """Running counters and chart data for one signed-in user.

    State is only ever replaced wholesale from a fresh aggregation, never
    incremented in place.
    """

    user_id: str
    today: MealTypeTotals = field(default_factory=MealTypeTotals)
    daily_totals: dict[date, int] = field(default_factory=dict)
    reference_date: date = field(default_factory=_utc_today)

    def sync(self, summary: DailySummary) -> None:
        """Replace all state from an aggregation result."""
        self.reference_date = summary.reference_date
        self.daily_totals = dict(summary.daily_totals)
        self.today = MealTypeTotals(**summary.today.as_dict())

    def refresh(
        self, stats_service: StatsService, now: datetime | None = None
    ) -> None:
        """Fetch fresh totals for the user and sync."""
        self.sync(stats_service.get_daily_summary(self.user_id, now=now))

    @property
    def total(self) -> int:
        return self.today.total

    def rolling_window(self) -> list[RollingWindowEntry]:
        return build_rolling_window(self.daily_totals, self.reference_date)
