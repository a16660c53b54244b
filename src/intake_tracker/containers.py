"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from intake_tracker.adapters.openai_meal_parser_client import OpenAIMealParserClient
from intake_tracker.adapters.supabase_activity_repository import (
    SupabaseActivityRepository,
)
from intake_tracker.adapters.supabase_entry_repository import SupabaseEntryRepository
from intake_tracker.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from intake_tracker.config import Settings
from intake_tracker.services.activity import ActivityService
from intake_tracker.services.entries import EntryService
from intake_tracker.services.meal_parser import MealParserService
from intake_tracker.services.stats import StatsService
from intake_tracker.services.user_settings import UserSettingsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    entry_service: EntryService
    activity_service: ActivityService
    user_settings_service: UserSettingsService
    stats_service: StatsService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    entry_repository = SupabaseEntryRepository(supabase_client)
    activity_repository = SupabaseActivityRepository(supabase_client)
    user_settings_repository = SupabaseUserSettingsRepository(supabase_client)

    openai_client = OpenAIMealParserClient.create(resolved_settings.openai_api_key)
    parser_service = MealParserService(
        client=openai_client,
        model=resolved_settings.openai_model,
        temperature=resolved_settings.openai_temperature,
        store=resolved_settings.openai_store,
    )
    user_settings_service = UserSettingsService(
        user_settings_repository,
        default_timezone=resolved_settings.default_timezone,
        default_calorie_deficit=resolved_settings.default_calorie_deficit,
    )
    activity_service = ActivityService(activity_repository)
    entry_service = EntryService(
        parser=parser_service,
        repository=entry_repository,
        user_settings_service=user_settings_service,
    )
    stats_service = StatsService(
        entry_repository=entry_repository,
        activity_service=activity_service,
        user_settings_service=user_settings_service,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        entry_service=entry_service,
        activity_service=activity_service,
        user_settings_service=user_settings_service,
        stats_service=stats_service,
        close_resources=close_resources,
    )
