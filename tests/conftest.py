"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from uuid import UUID, uuid4

import pytest

from intake_tracker.config import Settings
from intake_tracker.containers import AppContainer
from intake_tracker.domain.activity import DailyActivity
from intake_tracker.domain.entries import Entry, EntryWithItems
from intake_tracker.domain.nutrients import FoodItem
from intake_tracker.domain.profile import UserProfile
from intake_tracker.services.activity import ActivityRepository, ActivityService
from intake_tracker.services.entries import EntryRepository, EntryService
from intake_tracker.services.meal_parser import MealParserClient, MealParserService
from intake_tracker.services.stats import StatsService
from intake_tracker.services.user_settings import (
    UserSettingsRepository,
    UserSettingsService,
)
from tests.factories import meal_payload


@dataclass
class InMemoryEntryRepository(EntryRepository):
    """In-memory entry repository for tests."""

    entries: dict[UUID, Entry] = field(default_factory=dict)
    items: dict[UUID, FoodItem] = field(default_factory=dict)

    def create_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        raw_text: str,
        created_at: datetime,
        resolved_date: date,
        explicit_date_in_text: bool,
    ) -> Entry:
        entry = Entry(
            id=uuid4(),
            user_id=user_id,
            raw_text=raw_text,
            created_at=created_at,
            resolved_date=resolved_date,
            explicit_date_in_text=explicit_date_in_text,
        )
        self.entries[entry.id] = entry
        return entry

    def create_items(self, entry_id: UUID, items: list[FoodItem]) -> list[FoodItem]:
        stored = []
        for item in items:
            saved = replace(item, id=uuid4(), entry_id=entry_id)
            self.items[saved.id] = saved
            stored.append(saved)
        return stored

    def list_entries(
        self, user_id: UUID, start: date, end: date
    ) -> list[EntryWithItems]:
        matching = [
            entry
            for entry in self.entries.values()
            if entry.user_id == user_id and start <= entry.resolved_date <= end
        ]
        matching.sort(key=lambda entry: entry.created_at, reverse=True)
        return [
            EntryWithItems(
                entry=entry,
                items=[
                    item for item in self.items.values() if item.entry_id == entry.id
                ],
            )
            for entry in matching
        ]

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        entry = self.entries.get(entry_id)
        if entry is None or entry.user_id != user_id:
            return False
        del self.entries[entry_id]
        self.items = {
            item_id: item
            for item_id, item in self.items.items()
            if item.entry_id != entry_id
        }
        return True

    def get_item(self, user_id: UUID, item_id: UUID) -> FoodItem | None:
        item = self.items.get(item_id)
        if item is None or item.entry_id is None:
            return None
        entry = self.entries.get(item.entry_id)
        if entry is None or entry.user_id != user_id:
            return None
        return item

    def update_item(self, item: FoodItem) -> FoodItem:
        assert item.id is not None
        self.items[item.id] = item
        return item

    def delete_item(self, item_id: UUID) -> None:
        self.items.pop(item_id, None)


@dataclass
class InMemoryActivityRepository(ActivityRepository):
    """In-memory activity repository for tests."""

    selections: dict[tuple[UUID, date], DailyActivity] = field(default_factory=dict)

    def get_activity(self, user_id: UUID, day: date) -> DailyActivity | None:
        return self.selections.get((user_id, day))

    def list_activity(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyActivity]:
        return [
            activity
            for (owner, day), activity in self.selections.items()
            if owner == user_id and start <= day <= end
        ]

    def upsert_activity(
        self, user_id: UUID, day: date, activity_level_id: int
    ) -> DailyActivity:
        activity = DailyActivity(resolved_date=day, activity_level_id=activity_level_id)
        self.selections[(user_id, day)] = activity
        return activity


@dataclass
class InMemoryUserSettingsRepository(UserSettingsRepository):
    """In-memory user settings repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> UserProfile:
        current = self.profiles.get(user_id, UserProfile())
        updated = replace(current, **changes)
        self.profiles[user_id] = updated
        return updated


@dataclass
class FakeMealParserClient(MealParserClient):
    """Fake meal parser client returning a fixed payload."""

    payload: dict[str, object] = field(default_factory=meal_payload)
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def parse(  # noqa: PLR0913
        self,
        *,
        model: str,
        temperature: float | None,
        store: bool,
        instructions: str,
        prompt: str,
        image_data_url: str | None,
        schema: dict[str, object],
    ) -> dict[str, object]:
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "instructions": instructions,
                "image_data_url": image_data_url,
            }
        )
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
        api_token="api-token",
        openai_api_key="openai-key",
        default_timezone="America/New_York",
    )


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def parser_client() -> FakeMealParserClient:
    return FakeMealParserClient()


@pytest.fixture
def entry_repository() -> InMemoryEntryRepository:
    return InMemoryEntryRepository()


@pytest.fixture
def activity_repository() -> InMemoryActivityRepository:
    return InMemoryActivityRepository()


@pytest.fixture
def user_settings_repository() -> InMemoryUserSettingsRepository:
    return InMemoryUserSettingsRepository()


@pytest.fixture
def user_settings_service(
    settings: Settings, user_settings_repository: InMemoryUserSettingsRepository
) -> UserSettingsService:
    return UserSettingsService(
        user_settings_repository,
        default_timezone=settings.default_timezone,
        default_calorie_deficit=settings.default_calorie_deficit,
    )


@pytest.fixture
def activity_service(
    activity_repository: InMemoryActivityRepository,
) -> ActivityService:
    return ActivityService(activity_repository)


@pytest.fixture
def entry_service(
    settings: Settings,
    parser_client: FakeMealParserClient,
    entry_repository: InMemoryEntryRepository,
    user_settings_service: UserSettingsService,
) -> EntryService:
    parser = MealParserService(
        client=parser_client,
        model=settings.openai_model,
        temperature=settings.openai_temperature,
        store=settings.openai_store,
    )
    return EntryService(
        parser=parser,
        repository=entry_repository,
        user_settings_service=user_settings_service,
    )


@pytest.fixture
def stats_service(
    entry_repository: InMemoryEntryRepository,
    activity_service: ActivityService,
    user_settings_service: UserSettingsService,
) -> StatsService:
    return StatsService(
        entry_repository=entry_repository,
        activity_service=activity_service,
        user_settings_service=user_settings_service,
    )


@pytest.fixture
def container(
    settings: Settings,
    entry_service: EntryService,
    activity_service: ActivityService,
    user_settings_service: UserSettingsService,
    stats_service: StatsService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        entry_service=entry_service,
        activity_service=activity_service,
        user_settings_service=user_settings_service,
        stats_service=stats_service,
        close_resources=close_resources,
    )
