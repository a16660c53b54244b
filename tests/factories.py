"""Builders for test payloads and food items."""

from intake_tracker.domain.nutrients import NUTRIENT_COLUMNS, FoodItem, NutrientEstimate

_DEFAULT_VALUES = {
    "calories": 200.0,
    "protein_g": 4.0,
    "carbs_g": 44.0,
    "fat_g": 0.5,
    "saturated_fat_g": 0.1,
    "unsaturated_fat_g": 0.4,
    "fiber_g": 0.6,
    "sodium_mg": 2.0,
    "added_sugar_g": 0.0,
}


def meal_item_payload(food_name: str = "white rice", **values: float) -> dict:
    """Return one estimator item with bounds at 90% and 110% of each value."""
    item: dict[str, object] = {
        "food_name": food_name,
        "grams": 150.0,
        "grams_low": 120.0,
        "grams_high": 180.0,
    }
    for field_name, prefix in NUTRIENT_COLUMNS.items():
        value = values.get(field_name, _DEFAULT_VALUES[field_name])
        item[field_name] = value
        item[f"{prefix}_low"] = value * 0.9
        item[f"{prefix}_high"] = value * 1.1
    item["assumptions"] = ["cooked"]
    return item


def meal_payload(
    items: list[dict] | None = None, explicit_date: str | None = None
) -> dict[str, object]:
    return {
        "items": items if items is not None else [meal_item_payload()],
        "explicit_date": explicit_date,
    }


def food_item(
    name: str = "food", **values: float | tuple[float, float, float]
) -> FoodItem:
    """Build a food item; a bare number means a zero-width band."""
    estimates = {}
    for field_name, raw in values.items():
        if isinstance(raw, tuple):
            estimates[field_name] = NutrientEstimate(*raw)
        else:
            estimates[field_name] = NutrientEstimate(raw, raw, raw)
    return FoodItem(food_name=name, **estimates)
