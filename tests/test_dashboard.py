"""Tests for dashboard session state."""

from datetime import UTC, date, datetime

from calorie_tracker.domain.stats import MealTypeTotals
from calorie_tracker.services.dashboard import DashboardSession
from calorie_tracker.services.stats import StatsService
from tests.conftest import InMemoryStatsRepository, make_record

NOW = datetime(2024, 1, 11, 18, 0, tzinfo=UTC)


def test_refresh_loads_today_counters_and_chart() -> None:
    repo = InMemoryStatsRepository(
        records=[
            make_record(datetime(2024, 1, 11, 8, tzinfo=UTC), 300, "breakfast"),
            make_record(datetime(2024, 1, 11, 12, tzinfo=UTC), 600, "Lunch"),
            make_record(datetime(2024, 1, 11, 15, tzinfo=UTC), 150, "snack"),
            make_record(datetime(2024, 1, 9, 19, tzinfo=UTC), 800, "dinner"),
        ]
    )
    session = DashboardSession(user_id="alice")

    session.refresh(StatsService(repo), now=NOW)

    assert session.reference_date == date(2024, 1, 11)
    assert session.today == MealTypeTotals(breakfast=300, lunch=600, dinner=0)
    assert session.total == 900
    window = session.rolling_window()
    assert len(window) == 7
    assert window[-1].total == 1050
    assert window[-3].total == 800


def test_refresh_replaces_previous_state() -> None:
    records = [make_record(datetime(2024, 1, 11, 8, tzinfo=UTC), 300, "breakfast")]
    stats = StatsService(InMemoryStatsRepository(records=records))
    session = DashboardSession(user_id="alice")
    session.refresh(stats, now=NOW)

    records.append(make_record(datetime(2024, 1, 11, 9, tzinfo=UTC), 200, "breakfast"))
    session.refresh(stats, now=NOW)

    assert session.today.breakfast == 500
    assert session.daily_totals == {date(2024, 1, 11): 500}


def test_sync_copies_state_from_summary() -> None:
    stats = StatsService(
        InMemoryStatsRepository(
            records=[make_record(datetime(2024, 1, 11, 8, tzinfo=UTC), 100, "lunch")]
        )
    )
    summary = stats.get_daily_summary("alice", now=NOW)
    session = DashboardSession(user_id="alice")

    session.sync(summary)
    session.today.lunch += 1

    assert summary.today.lunch == 100


def test_new_session_starts_empty() -> None:
    session = DashboardSession(user_id="alice")

    assert session.total == 0
    assert [entry.total for entry in session.rolling_window()] == [0] * 7
