"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.meals import MealRecord
from calorie_tracker.domain.models import UserRecord
from calorie_tracker.services.estimation import EstimationClient, EstimationService
from calorie_tracker.services.meals import MealLogService, MealRepository
from calorie_tracker.services.stats import StatsRepository, StatsService
from calorie_tracker.services.users import UserRepository, UserService

DEFAULT_REPLY = (
    '{"totalCalories": 350, '
    '"breakdown": ["2 eggs: 140 kcal", "toast: 210 kcal"]}'
)


def make_record(  # noqa: PLR0913
    created_at: datetime,
    calories: int | None,
    meal_type: str = "breakfast",
    user_id: str = "alice",
    meal_text: str | None = "meal",
    record_id: int | None = None,
) -> MealRecord:
    """Build a meal record with sensible defaults."""
    return MealRecord(
        user_id=user_id,
        meal_type=meal_type,
        calories=calories,
        created_at=created_at,
        meal_text=meal_text,
        id=record_id,
    )


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, UserRecord] = field(default_factory=dict)
    reachable: bool = True

    def get_user(self, user_id: str) -> UserRecord | None:
        return self.users.get(user_id)

    def create_user(self, user_id: str) -> UserRecord:
        user = UserRecord(user_id=user_id, created_at=datetime.now(tz=UTC))
        self.users[user_id] = user
        return user

    def ping(self) -> None:
        if not self.reachable:
            raise RuntimeError("store unreachable")


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository; created_at is assigned on insert."""

    records: list[MealRecord] = field(default_factory=list)
    last_bounds: tuple[datetime | None, datetime | None] | None = None

    def create_meal(
        self, user_id: str, meal_text: str, meal_type: str, calories: int
    ) -> MealRecord:
        created_at = datetime.now(tz=UTC)
        if self.records and created_at <= self.records[-1].created_at:
            created_at = self.records[-1].created_at + timedelta(microseconds=1)
        record = make_record(
            created_at=created_at,
            calories=calories,
            meal_type=meal_type,
            user_id=user_id,
            meal_text=meal_text,
            record_id=len(self.records) + 1,
        )
        self.records.append(record)
        return record

    def list_meals(
        self, user_id: str, start: datetime | None, end: datetime | None
    ) -> list[MealRecord]:
        self.last_bounds = (start, end)
        meals = [
            record
            for record in self.records
            if record.user_id == user_id
            and (start is None or record.created_at >= start)
            and (end is None or record.created_at <= end)
        ]
        return sorted(meals, key=lambda record: record.created_at, reverse=True)


@dataclass
class FailingMealRepository(MealRepository):
    """Meal repository whose writes always fail."""

    def create_meal(
        self, user_id: str, meal_text: str, meal_type: str, calories: int
    ) -> MealRecord:
        raise RuntimeError("insert failed")

    def list_meals(
        self, user_id: str, start: datetime | None, end: datetime | None
    ) -> list[MealRecord]:
        raise RuntimeError("select failed")


@dataclass
class InMemoryStatsRepository(StatsRepository):
    """In-memory stats repository for tests."""

    records: list[MealRecord] = field(default_factory=list)
    last_start: datetime | None = None
    error: Exception | None = None

    def list_records_since(self, user_id: str, start: datetime) -> list[MealRecord]:
        if self.error is not None:
            raise self.error
        self.last_start = start
        matching = [
            record
            for record in self.records
            if record.user_id == user_id and record.created_at >= start
        ]
        return sorted(matching, key=lambda record: record.created_at)


@dataclass
class FakeEstimationClient(EstimationClient):
    """Fake completion client returning a fixed reply."""

    reply: str = DEFAULT_REPLY
    prompts: list[str] = field(default_factory=list)

    async def complete(
        self,
        *,
        model: str,
        system_prompt: str,
        prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        self.prompts.append(prompt)
        return self.reply


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_secret_key="header.payload.signature",
        openai_api_key="openai-key",
        environment="test",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def meal_records() -> list[MealRecord]:
    return []


@pytest.fixture
def meal_repository(meal_records: list[MealRecord]) -> InMemoryMealRepository:
    return InMemoryMealRepository(records=meal_records)


@pytest.fixture
def stats_repository(meal_records: list[MealRecord]) -> InMemoryStatsRepository:
    return InMemoryStatsRepository(records=meal_records)


@pytest.fixture
def estimation_client() -> FakeEstimationClient:
    return FakeEstimationClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    user_repository: InMemoryUserRepository,
    meal_repository: InMemoryMealRepository,
    stats_repository: InMemoryStatsRepository,
    estimation_client: FakeEstimationClient,
) -> AppContainer:
    estimation_service = EstimationService(
        client=estimation_client,
        model=settings.openai_model,
        temperature=settings.openai_temperature,
        max_tokens=settings.openai_max_tokens,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_service=UserService(user_repository),
        meal_log_service=MealLogService(meal_repository),
        stats_service=StatsService(stats_repository),
        estimation_service=estimation_service,
        close_resources=close_resources,
    )
