"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from calorie_tracker.adapters.openai_estimation_client import OpenAIEstimationClient
from calorie_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from calorie_tracker.adapters.supabase_stats_repository import SupabaseStatsRepository
from calorie_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from calorie_tracker.config import Settings
from calorie_tracker.services.estimation import EstimationService
from calorie_tracker.services.meals import MealLogService
from calorie_tracker.services.stats import StatsService
from calorie_tracker.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    meal_log_service: MealLogService
    stats_service: StatsService
    estimation_service: EstimationService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_secret_key
    )
    user_service = UserService(SupabaseUserRepository(supabase_client))
    meal_log_service = MealLogService(SupabaseMealRepository(supabase_client))
    stats_service = StatsService(SupabaseStatsRepository(supabase_client))
    openai_client = OpenAIEstimationClient.create(resolved_settings.openai_api_key)
    estimation_service = EstimationService(
        client=openai_client,
        model=resolved_settings.openai_model,
        temperature=resolved_settings.openai_temperature,
        max_tokens=resolved_settings.openai_max_tokens,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        meal_log_service=meal_log_service,
        stats_service=stats_service,
        estimation_service=estimation_service,
        close_resources=close_resources,
    )
