"""Entry logging service."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from intake_tracker.domain.entries import Entry, EntryCreation, EntryWithItems
from intake_tracker.domain.nutrients import FoodItem, FoodItemPatch
from intake_tracker.services.aggregation import apply_override, validate_override
from intake_tracker.services.dates import (
    parse_date_string,
    resolve_date,
    today_in_timezone,
)
from intake_tracker.services.meal_parser import (
    MealParserService,
    to_food_item,
    validate_parsed_meal,
)
from intake_tracker.services.user_settings import UserSettingsService

logger = logging.getLogger(__name__)

IMAGE_ONLY_TEXT = "1 serving"


class EntryValidationError(ValueError):
    """Raised when a submission cannot be logged."""


class EntryRepository(Protocol):
    """Persistence interface for entries and their food items."""

    def create_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        raw_text: str,
        created_at: datetime,
        resolved_date: date,
        explicit_date_in_text: bool,
    ) -> Entry:
        """Create an entry row and return it."""

    def create_items(self, entry_id: UUID, items: list[FoodItem]) -> list[FoodItem]:
        """Create item rows for an entry and return them with ids."""

    def list_entries(
        self, user_id: UUID, start: date, end: date
    ) -> list[EntryWithItems]:
        """Return entries resolved within an inclusive date range."""

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry and its items, returning False if not owned."""

    def get_item(self, user_id: UUID, item_id: UUID) -> FoodItem | None:
        """Return an item if it belongs to one of the user's entries."""

    def update_item(self, item: FoodItem) -> FoodItem:
        """Persist an overridden item."""

    def delete_item(self, item_id: UUID) -> None:
        """Delete a single item."""


@dataclass
class EntryService:
    """Service that parses submissions and manages stored entries."""

    parser: MealParserService
    repository: EntryRepository
    user_settings_service: UserSettingsService

    async def create_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        raw_text: str,
        image_data_url: str | None = None,
        submitted_at: datetime | None = None,
        override_date: str | None = None,
    ) -> EntryCreation:
        """Parse a meal description and store it under its resolved day."""
        text = raw_text.strip()
        if not text and not image_data_url:
            raise EntryValidationError("Meal text or image is required")
        if not text:
            text = IMAGE_ONLY_TEXT
        picked_date = None
        if override_date is not None:
            picked_date = parse_date_string(override_date)
            if picked_date is None:
                raise EntryValidationError("Date must be in YYYY-MM-DD format")

        created_at = submitted_at or datetime.now(tz=UTC)
        timezone = self.user_settings_service.get_timezone(user_id)
        today = today_in_timezone(timezone, created_at)

        parsed = await self.parser.parse(text, today, image_data_url)
        warnings = validate_parsed_meal(parsed)
        if warnings:
            logger.warning(
                "Meal parse warnings",
                extra={"user_id": str(user_id), "warnings": warnings},
            )

        if picked_date is not None:
            resolved_day, explicit = picked_date, False
        else:
            resolved = resolve_date(parsed.explicit_date, created_at, timezone)
            resolved_day, explicit = resolved.date, resolved.was_explicit

        entry = self.repository.create_entry(
            user_id=user_id,
            raw_text=text,
            created_at=created_at,
            resolved_date=resolved_day,
            explicit_date_in_text=explicit,
        )
        items = self.repository.create_items(
            entry.id, [to_food_item(item) for item in parsed.items]
        )
        return EntryCreation(entry=entry, items=items, validation_warnings=warnings)

    def list_entries(
        self, user_id: UUID, start: date, end: date
    ) -> list[EntryWithItems]:
        """Return entries within an inclusive date range."""
        return self.repository.list_entries(user_id, start, end)

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry with its items."""
        return self.repository.delete_entry(user_id, entry_id)

    def update_item(
        self, user_id: UUID, item_id: UUID, patch: FoodItemPatch
    ) -> FoodItem | None:
        """Apply a manual override to an item the user owns."""
        validate_override(patch)
        item = self.repository.get_item(user_id, item_id)
        if item is None:
            return None
        updated = apply_override(item, patch)
        if updated is item:
            return item
        return self.repository.update_item(updated)

    def delete_item(self, user_id: UUID, item_id: UUID) -> bool:
        """Delete an item the user owns."""
        if self.repository.get_item(user_id, item_id) is None:
            return False
        self.repository.delete_item(item_id)
        return True
