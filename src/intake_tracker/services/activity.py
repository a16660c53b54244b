"""Daily activity level service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from intake_tracker.domain.activity import ActivityLevel, DailyActivity
from intake_tracker.services.energy import default_activity_level, get_activity_level


class ActivityRepository(Protocol):
    """Persistence interface for per-day activity selections."""

    def get_activity(self, user_id: UUID, day: date) -> DailyActivity | None:
        """Return the activity selection for a day."""

    def list_activity(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyActivity]:
        """Return activity selections within an inclusive date range."""

    def upsert_activity(
        self, user_id: UUID, day: date, activity_level_id: int
    ) -> DailyActivity:
        """Create or replace the single selection for a day."""


@dataclass
class ActivityService:
    """Service for selecting the activity multiplier of a day."""

    repository: ActivityRepository

    def get_level(self, user_id: UUID, day: date) -> ActivityLevel:
        """Return the day's activity level, defaulting to moderate."""
        activity = self.repository.get_activity(user_id, day)
        if activity is None:
            return default_activity_level()
        return get_activity_level(activity.activity_level_id)

    def set_level(
        self, user_id: UUID, day: date, activity_level_id: int
    ) -> DailyActivity:
        """Store the activity level for a day."""
        get_activity_level(activity_level_id)
        return self.repository.upsert_activity(user_id, day, activity_level_id)

    def levels_by_day(
        self, user_id: UUID, start: date, end: date
    ) -> dict[date, ActivityLevel]:
        """Return the explicitly selected levels within a date range."""
        return {
            activity.resolved_date: get_activity_level(activity.activity_level_id)
            for activity in self.repository.list_activity(user_id, start, end)
        }
