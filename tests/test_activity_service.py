"""Tests for the activity service."""

from datetime import date

import pytest

from intake_tracker.services.energy import UnknownActivityLevelError


def test_get_level_defaults_to_moderate(activity_service, user_id) -> None:
    level = activity_service.get_level(user_id, date(2026, 1, 29))

    assert level.id == 3
    assert level.multiplier == 1.55


def test_set_level_keeps_one_row_per_day(
    activity_service, activity_repository, user_id
) -> None:
    day = date(2026, 1, 29)

    activity_service.set_level(user_id, day, 2)
    activity_service.set_level(user_id, day, 5)

    assert len(activity_repository.selections) == 1
    assert activity_service.get_level(user_id, day).label == "Very active"


def test_set_unknown_level_is_rejected(
    activity_service, activity_repository, user_id
) -> None:
    with pytest.raises(UnknownActivityLevelError):
        activity_service.set_level(user_id, date(2026, 1, 29), 0)

    assert activity_repository.selections == {}


def test_levels_by_day(activity_service, user_id) -> None:
    activity_service.set_level(user_id, date(2026, 1, 10), 1)
    activity_service.set_level(user_id, date(2026, 1, 20), 4)
    activity_service.set_level(user_id, date(2026, 2, 1), 5)

    levels = activity_service.levels_by_day(
        user_id, date(2026, 1, 1), date(2026, 1, 31)
    )

    assert {day: level.id for day, level in levels.items()} == {
        date(2026, 1, 10): 1,
        date(2026, 1, 20): 4,
    }
