"""Domain models for logged entries."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from intake_tracker.domain.nutrients import FoodItem


@dataclass(frozen=True)
class ResolvedDate:
    """Calendar day an entry counts toward."""

    date: date
    was_explicit: bool


@dataclass(frozen=True)
class Entry:
    """A raw user submission keyed by its resolved day."""

    id: UUID
    user_id: UUID
    raw_text: str
    created_at: datetime
    resolved_date: date
    explicit_date_in_text: bool


@dataclass(frozen=True)
class EntryWithItems:
    """Entry with its parsed food items."""

    entry: Entry
    items: list[FoodItem]


@dataclass(frozen=True)
class EntryCreation:
    """Result of logging a meal."""

    entry: Entry
    items: list[FoodItem]
    validation_warnings: list[str]
