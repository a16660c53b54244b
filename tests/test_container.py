"""Tests for container wiring."""

import asyncio

from intake_tracker.config import parse_allowed_user_ids
from intake_tracker.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.entry_service is not None
    assert container.stats_service.user_settings_service is (
        container.user_settings_service
    )
    assert container.user_settings_service.default_timezone == "America/New_York"
    asyncio.run(container.close_resources())


def test_parse_allowed_user_ids() -> None:
    allowed = parse_allowed_user_ids(
        " 2b1f7c1e-5d6a-4a43-9b5e-0f0cfe3f7a10, not-a-uuid,"
    )

    assert allowed is not None
    assert {str(value) for value in allowed} == {"2b1f7c1e-5d6a-4a43-9b5e-0f0cfe3f7a10"}
    assert parse_allowed_user_ids("*") is None
    assert parse_allowed_user_ids(None) is None
