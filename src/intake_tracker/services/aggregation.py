"""Nutrient aggregation and manual overrides."""

import math
from collections.abc import Iterable
from dataclasses import replace

from intake_tracker.domain.nutrients import (
    NUTRIENT_FIELDS,
    FoodItem,
    FoodItemPatch,
    NutrientEstimate,
    NutrientTotals,
)

MIN_OVERRIDE_CALORIES = 5

_RESCALED_FIELDS = ("calories", "protein_g", "carbs_g", "fat_g", "fiber_g", "grams")
_FAT_BREAKDOWN_FIELDS = ("saturated_fat_g", "unsaturated_fat_g")
_NON_NEGATIVE_FIELDS = {
    "protein_g": "Protein",
    "carbs_g": "Carbs",
    "fat_g": "Fat",
    "fiber_g": "Fiber",
    "grams": "Grams",
}


class OverrideValidationError(ValueError):
    """Raised when a manual override would store an impossible value."""


def aggregate_items(items: Iterable[FoodItem]) -> NutrientTotals:
    """Sum value, low and high independently for every tracked nutrient.

    Sums are correctly rounded, so totals do not depend on item order.
    """
    items = list(items)
    sums: dict[str, NutrientEstimate] = {}
    for name in NUTRIENT_FIELDS:
        estimates = [item.estimate(name) for item in items]
        sums[name] = NutrientEstimate(
            value=math.fsum(estimate.value for estimate in estimates),
            low=math.fsum(estimate.low for estimate in estimates),
            high=math.fsum(estimate.high for estimate in estimates),
        )
    return NutrientTotals(**sums)


def validate_override(patch: FoodItemPatch) -> None:
    """Reject a patch that sets a nutrient below its floor or to NaN/infinity."""
    for field_name in _RESCALED_FIELDS:
        value = getattr(patch, field_name)
        if value is not None and not math.isfinite(value):
            raise OverrideValidationError(f"{field_name} must be a finite number")
    if patch.calories is not None and patch.calories < MIN_OVERRIDE_CALORIES:
        raise OverrideValidationError(
            f"Calories must be at least {MIN_OVERRIDE_CALORIES}"
        )
    for field_name, label in _NON_NEGATIVE_FIELDS.items():
        value = getattr(patch, field_name)
        if value is not None and value < 0:
            raise OverrideValidationError(f"{label} cannot be negative")


def apply_override(item: FoodItem, patch: FoodItemPatch) -> FoodItem:
    """Replace point values and rescale their bounds by the same ratio.

    Every changed field is recorded once in ``override_fields``. Changing
    total fat also rescales the saturated/unsaturated breakdown. The patch
    is validated up front so it is applied entirely or not at all.
    """
    validate_override(patch)
    updates: dict[str, object] = {}
    overridden = list(item.override_fields)

    if patch.food_name is not None and patch.food_name != item.food_name:
        updates["food_name"] = patch.food_name
        _record_override(overridden, "food_name")

    for field_name in _RESCALED_FIELDS:
        new_value = getattr(patch, field_name)
        if new_value is None:
            continue
        current = item.estimate(field_name)
        if float(new_value) == current.value:
            continue
        ratio = _override_ratio(current.value, float(new_value))
        updates[field_name] = NutrientEstimate(
            value=float(new_value),
            low=current.low * ratio,
            high=current.high * ratio,
        )
        _record_override(overridden, field_name)
        if field_name == "fat_g":
            for breakdown in _FAT_BREAKDOWN_FIELDS:
                existing = getattr(item, breakdown)
                if existing is not None:
                    updates[breakdown] = existing.scaled(ratio)

    if not updates:
        return item
    return replace(
        item,
        **updates,
        has_override=True,
        override_fields=tuple(overridden),
    )


def _override_ratio(old_value: float, new_value: float) -> float:
    if old_value == 0:
        return 1.0
    return new_value / old_value


def _record_override(overridden: list[str], field_name: str) -> None:
    if field_name not in overridden:
        overridden.append(field_name)
