"""User settings service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from intake_tracker.domain.profile import DEFAULT_CALORIE_DEFICIT, UserProfile
from intake_tracker.services.dates import load_timezone

_BODY_STAT_FIELDS = ("weight_kg", "height_cm", "age_years")
_EDITABLE_FIELDS = {*_BODY_STAT_FIELDS, "sex", "calorie_deficit", "timezone", "name"}


class ProfileValidationError(ValueError):
    """Raised when a profile update carries an unusable value."""


class UserSettingsRepository(Protocol):
    """Persistence interface for user settings."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the stored profile if one exists."""

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> UserProfile:
        """Persist profile changes and return the updated profile."""


@dataclass
class UserSettingsService:
    """Service for user settings."""

    repository: UserSettingsRepository
    default_timezone: str = "America/New_York"
    default_calorie_deficit: int = DEFAULT_CALORIE_DEFICIT

    def get_profile(self, user_id: UUID) -> UserProfile:
        """Return the user's profile, or an empty one with configured defaults."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            return UserProfile(calorie_deficit=self.default_calorie_deficit)
        return profile

    def timezone_for(self, profile: UserProfile) -> str:
        """Return the profile timezone or the configured fallback."""
        return profile.timezone or self.default_timezone

    def get_timezone(self, user_id: UUID) -> str:
        """Return the user timezone or the configured fallback if unset."""
        return self.timezone_for(self.get_profile(user_id))

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> UserProfile:
        """Validate and persist profile changes.

        Zero or empty body stats are stored as missing so that energy targets
        are skipped rather than computed from a zero weight.
        """
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ProfileValidationError(
                f"Unknown profile fields: {', '.join(sorted(unknown))}"
            )
        cleaned: dict[str, object] = {}
        for key, value in changes.items():
            if key in _BODY_STAT_FIELDS or key == "sex":
                cleaned[key] = value or None
            else:
                cleaned[key] = value
        sex = cleaned.get("sex")
        if sex is not None and sex not in {"male", "female"}:
            raise ProfileValidationError("Sex must be 'male' or 'female'")
        for key in _BODY_STAT_FIELDS:
            value = cleaned.get(key)
            if isinstance(value, int | float) and value < 0:
                raise ProfileValidationError(f"{key} cannot be negative")
        timezone = cleaned.get("timezone")
        if timezone is not None:
            load_timezone(str(timezone))
        if "calorie_deficit" in cleaned and cleaned["calorie_deficit"] is None:
            cleaned["calorie_deficit"] = self.default_calorie_deficit
        return self.repository.update_profile(user_id, cleaned)
