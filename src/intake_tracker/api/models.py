"""Request payload models for the JSON API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CreateEntryRequest(BaseModel):
    """New meal submission."""

    raw_text: str = ""
    image: str | None = None
    client_timestamp: datetime | None = None
    override_date: str | None = None


class UpdateItemRequest(BaseModel):
    """Manual override of an item's point values."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    food_name: str | None = None
    calories: float | None = None
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    fiber_g: float | None = None
    grams: float | None = None


class SetActivityRequest(BaseModel):
    """Activity level selection for a day."""

    date: str
    activity_level_id: int


class UpdateSettingsRequest(BaseModel):
    """Partial profile update; only supplied fields are changed."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    weight_kg: float | None = None
    height_cm: float | None = None
    age_years: int | None = None
    sex: str | None = None
    calorie_deficit: int | None = None
    timezone: str | None = None
