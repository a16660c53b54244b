"""Models for LLM meal parsing results."""

from pydantic import BaseModel, Field


class ParsedFoodItem(BaseModel):
    """Single food item estimated by the language model."""

    food_name: str
    grams: float | None = None
    grams_low: float | None = None
    grams_high: float | None = None
    calories: float
    calories_low: float
    calories_high: float
    protein_g: float
    protein_low: float
    protein_high: float
    carbs_g: float
    carbs_low: float
    carbs_high: float
    fat_g: float
    fat_low: float
    fat_high: float
    saturated_fat_g: float
    saturated_fat_low: float
    saturated_fat_high: float
    unsaturated_fat_g: float
    unsaturated_fat_low: float
    unsaturated_fat_high: float
    fiber_g: float = 0.0
    fiber_low: float = 0.0
    fiber_high: float = 0.0
    sodium_mg: float = 0.0
    sodium_low: float = 0.0
    sodium_high: float = 0.0
    added_sugar_g: float = 0.0
    added_sugar_low: float = 0.0
    added_sugar_high: float = 0.0
    assumptions: list[str] = Field(default_factory=list)


class ParsedMeal(BaseModel):
    """Structured output for one free-text meal description."""

    items: list[ParsedFoodItem]
    explicit_date: str | None = None
