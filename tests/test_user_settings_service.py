"""Tests for the user settings service."""

import pytest

from intake_tracker.domain.profile import UserProfile
from intake_tracker.services.dates import InvalidTimezoneError
from intake_tracker.services.user_settings import (
    ProfileValidationError,
    UserSettingsService,
)


def test_missing_profile_gets_configured_defaults(
    user_settings_repository, user_id
) -> None:
    service = UserSettingsService(
        user_settings_repository,
        default_timezone="Europe/Berlin",
        default_calorie_deficit=250,
    )

    profile = service.get_profile(user_id)

    assert profile.calorie_deficit == 250
    assert profile.weight_kg is None
    assert service.get_timezone(user_id) == "Europe/Berlin"


def test_stored_timezone_wins(
    user_settings_service, user_settings_repository, user_id
) -> None:
    user_settings_repository.profiles[user_id] = UserProfile(timezone="Asia/Tokyo")

    assert user_settings_service.get_timezone(user_id) == "Asia/Tokyo"


def test_update_profile_stores_zero_stats_as_missing(
    user_settings_service, user_id
) -> None:
    profile = user_settings_service.update_profile(
        user_id, {"weight_kg": 0, "height_cm": 180.0, "age_years": 41, "sex": ""}
    )

    assert profile.weight_kg is None
    assert profile.height_cm == 180.0
    assert profile.age_years == 41
    assert profile.sex is None


def test_update_profile_validates_sex(user_settings_service, user_id) -> None:
    with pytest.raises(ProfileValidationError):
        user_settings_service.update_profile(user_id, {"sex": "other"})


def test_update_profile_rejects_negative_stats(user_settings_service, user_id) -> None:
    with pytest.raises(ProfileValidationError):
        user_settings_service.update_profile(user_id, {"height_cm": -170})


def test_update_profile_rejects_unknown_fields(user_settings_service, user_id) -> None:
    with pytest.raises(ProfileValidationError):
        user_settings_service.update_profile(user_id, {"password_hash": "x"})


def test_update_profile_validates_timezone(
    user_settings_service, user_settings_repository, user_id
) -> None:
    with pytest.raises(InvalidTimezoneError):
        user_settings_service.update_profile(user_id, {"timezone": "Moon/Base"})

    assert user_id not in user_settings_repository.profiles


def test_update_profile_resets_cleared_deficit(user_settings_service, user_id) -> None:
    profile = user_settings_service.update_profile(
        user_id, {"calorie_deficit": None, "timezone": "America/Chicago"}
    )

    assert profile.calorie_deficit == 500
    assert profile.timezone == "America/Chicago"
