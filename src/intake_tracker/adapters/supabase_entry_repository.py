"""Supabase repository for entries and entry items."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from intake_tracker.domain.entries import Entry, EntryWithItems
from intake_tracker.domain.nutrients import NUTRIENT_COLUMNS, FoodItem, NutrientEstimate
from intake_tracker.services.entries import EntryRepository

ENTRY_COLUMNS = (
    "id, user_id, raw_text, created_at, resolved_date, explicit_date_in_text"
)


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation for entries."""

    client: Client

    def create_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        raw_text: str,
        created_at: datetime,
        resolved_date: date,
        explicit_date_in_text: bool,
    ) -> Entry:
        """Create an entry row and return it."""
        response = (
            self.client.table("entries")
            .insert(
                {
                    "user_id": str(user_id),
                    "raw_text": raw_text,
                    "created_at": created_at.isoformat(),
                    "resolved_date": resolved_date.isoformat(),
                    "explicit_date_in_text": explicit_date_in_text,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create entry")
        return _parse_entry(response.data[0])

    def create_items(self, entry_id: UUID, items: list[FoodItem]) -> list[FoodItem]:
        """Create item rows for an entry."""
        if not items:
            return []
        payload = []
        for item in items:
            row = _item_row(item)
            row["entry_id"] = str(entry_id)
            payload.append(row)
        response = self.client.table("entry_items").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create entry items")
        return [_parse_item(row) for row in response.data]

    def list_entries(
        self, user_id: UUID, start: date, end: date
    ) -> list[EntryWithItems]:
        """Return entries with their items within an inclusive date range."""
        response = (
            self.client.table("entries")
            .select(f"{ENTRY_COLUMNS}, entry_items(*)")
            .eq("user_id", str(user_id))
            .gte("resolved_date", start.isoformat())
            .lte("resolved_date", end.isoformat())
            .order("created_at", desc=True)
            .execute()
        )
        return [
            EntryWithItems(
                entry=_parse_entry(row),
                items=[_parse_item(item) for item in row.get("entry_items") or []],
            )
            for row in response.data or []
        ]

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry; items are removed by the cascade."""
        response = (
            self.client.table("entries")
            .delete()
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)

    def get_item(self, user_id: UUID, item_id: UUID) -> FoodItem | None:
        """Return an item when its entry belongs to the user."""
        response = (
            self.client.table("entry_items")
            .select("*")
            .eq("id", str(item_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        item = _parse_item(response.data[0])
        owner = (
            self.client.table("entries")
            .select("id")
            .eq("id", str(item.entry_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not owner.data:
            return None
        return item

    def update_item(self, item: FoodItem) -> FoodItem:
        """Persist an overridden item."""
        if item.id is None:
            raise ValueError("Cannot update an item without an id")
        response = (
            self.client.table("entry_items")
            .update(_item_row(item))
            .eq("id", str(item.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update entry item")
        return _parse_item(response.data[0])

    def delete_item(self, item_id: UUID) -> None:
        """Delete a single item."""
        self.client.table("entry_items").delete().eq("id", str(item_id)).execute()


def _item_row(item: FoodItem) -> dict[str, object]:
    row: dict[str, object] = {
        "food_name": item.food_name,
        "grams": item.grams.value if item.grams else None,
        "grams_low": item.grams.low if item.grams else None,
        "grams_high": item.grams.high if item.grams else None,
        "assumptions": list(item.assumptions),
        "has_override": item.has_override,
        "override_fields": list(item.override_fields) or None,
    }
    for field_name, prefix in NUTRIENT_COLUMNS.items():
        estimate = item.estimate(field_name)
        row[field_name] = estimate.value
        row[f"{prefix}_low"] = estimate.low
        row[f"{prefix}_high"] = estimate.high
    return row


def _parse_estimate(
    row: dict[str, object], value_key: str, prefix: str
) -> NutrientEstimate | None:
    value = row.get(value_key)
    if value is None:
        return None
    low = row.get(f"{prefix}_low")
    high = row.get(f"{prefix}_high")
    return NutrientEstimate(
        value=float(value),
        low=float(low) if low is not None else float(value),
        high=float(high) if high is not None else float(value),
    )


def _parse_item(row: dict[str, object]) -> FoodItem:
    estimates = {
        field_name: _parse_estimate(row, field_name, prefix)
        for field_name, prefix in NUTRIENT_COLUMNS.items()
    }
    return FoodItem(
        food_name=str(row.get("food_name", "")),
        grams=_parse_estimate(row, "grams", "grams"),
        assumptions=tuple(row.get("assumptions") or ()),
        id=UUID(str(row["id"])) if row.get("id") else None,
        entry_id=UUID(str(row["entry_id"])) if row.get("entry_id") else None,
        has_override=bool(row.get("has_override", False)),
        override_fields=tuple(row.get("override_fields") or ()),
        **estimates,
    )


def _parse_entry(row: dict[str, object]) -> Entry:
    return Entry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        raw_text=str(row.get("raw_text", "")),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        resolved_date=date.fromisoformat(str(row["resolved_date"])),
        explicit_date_in_text=bool(row.get("explicit_date_in_text", False)),
    )
