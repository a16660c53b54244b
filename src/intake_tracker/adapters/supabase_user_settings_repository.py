"""Supabase repository for user settings."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from intake_tracker.domain.profile import DEFAULT_CALORIE_DEFICIT, UserProfile
from intake_tracker.services.user_settings import UserSettingsRepository

PROFILE_COLUMNS = (
    "name, weight_kg, height_cm, age_years, sex, calorie_deficit, timezone"
)


@dataclass
class SupabaseUserSettingsRepository(UserSettingsRepository):
    """Supabase implementation for user settings."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the stored profile for a user."""
        response = (
            self.client.table("user_settings")
            .select(PROFILE_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> UserProfile:
        """Update profile columns and return the stored profile."""
        response = (
            self.client.table("user_settings")
            .update({**changes, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user settings")
        return _parse_profile(response.data[0])


def _optional_float(value: object) -> float | None:
    return float(value) if value is not None else None


def _parse_profile(row: dict[str, object]) -> UserProfile:
    age = row.get("age_years")
    deficit = row.get("calorie_deficit")
    if deficit is None:
        deficit = DEFAULT_CALORIE_DEFICIT
    sex = row.get("sex")
    return UserProfile(
        weight_kg=_optional_float(row.get("weight_kg")),
        height_cm=_optional_float(row.get("height_cm")),
        age_years=int(age) if age is not None else None,
        sex=sex if sex in {"male", "female"} else None,
        calorie_deficit=int(deficit),
        timezone=row.get("timezone") or None,
        name=row.get("name") or None,
    )
