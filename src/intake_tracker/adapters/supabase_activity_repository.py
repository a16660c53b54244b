"""Supabase repository for daily activity selections."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from intake_tracker.domain.activity import DailyActivity
from intake_tracker.services.activity import ActivityRepository


@dataclass
class SupabaseActivityRepository(ActivityRepository):
    """Supabase implementation for daily activity."""

    client: Client

    def get_activity(self, user_id: UUID, day: date) -> DailyActivity | None:
        """Return the activity selection for a day."""
        response = (
            self.client.table("daily_activity")
            .select("resolved_date, activity_level_id")
            .eq("user_id", str(user_id))
            .eq("resolved_date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_activity(response.data[0])

    def list_activity(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyActivity]:
        """Return activity selections within an inclusive date range."""
        response = (
            self.client.table("daily_activity")
            .select("resolved_date, activity_level_id")
            .eq("user_id", str(user_id))
            .gte("resolved_date", start.isoformat())
            .lte("resolved_date", end.isoformat())
            .execute()
        )
        return [_parse_activity(row) for row in response.data or []]

    def upsert_activity(
        self, user_id: UUID, day: date, activity_level_id: int
    ) -> DailyActivity:
        """Create or replace the selection for a day."""
        response = (
            self.client.table("daily_activity")
            .upsert(
                {
                    "user_id": str(user_id),
                    "resolved_date": day.isoformat(),
                    "activity_level_id": activity_level_id,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id,resolved_date",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save daily activity")
        return _parse_activity(response.data[0])


def _parse_activity(row: dict[str, object]) -> DailyActivity:
    return DailyActivity(
        resolved_date=date.fromisoformat(str(row["resolved_date"])),
        activity_level_id=int(row["activity_level_id"]),
    )
