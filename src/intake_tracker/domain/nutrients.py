"""Nutrient estimate domain models."""

from dataclasses import dataclass
from uuid import UUID

# Tracked nutrient field -> flat column prefix used for "<prefix>_low/_high".
NUTRIENT_COLUMNS: dict[str, str] = {
    "calories": "calories",
    "protein_g": "protein",
    "carbs_g": "carbs",
    "fat_g": "fat",
    "saturated_fat_g": "saturated_fat",
    "unsaturated_fat_g": "unsaturated_fat",
    "fiber_g": "fiber",
    "sodium_mg": "sodium",
    "added_sugar_g": "added_sugar",
}

NUTRIENT_FIELDS: tuple[str, ...] = tuple(NUTRIENT_COLUMNS)


@dataclass(frozen=True)
class NutrientEstimate:
    """Point estimate with a 90% confidence band."""

    value: float
    low: float
    high: float

    def scaled(self, ratio: float) -> "NutrientEstimate":
        """Return the estimate with value and bounds multiplied by ratio."""
        return NutrientEstimate(
            value=self.value * ratio,
            low=self.low * ratio,
            high=self.high * ratio,
        )


ZERO_ESTIMATE = NutrientEstimate(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class FoodItem:
    """A single food with per-nutrient estimates."""

    food_name: str
    calories: NutrientEstimate | None = None
    protein_g: NutrientEstimate | None = None
    carbs_g: NutrientEstimate | None = None
    fat_g: NutrientEstimate | None = None
    saturated_fat_g: NutrientEstimate | None = None
    unsaturated_fat_g: NutrientEstimate | None = None
    fiber_g: NutrientEstimate | None = None
    sodium_mg: NutrientEstimate | None = None
    added_sugar_g: NutrientEstimate | None = None
    grams: NutrientEstimate | None = None
    assumptions: tuple[str, ...] = ()
    id: UUID | None = None
    entry_id: UUID | None = None
    has_override: bool = False
    override_fields: tuple[str, ...] = ()

    def estimate(self, field_name: str) -> NutrientEstimate:
        """Return the estimate for a field, treating missing values as zero."""
        value = getattr(self, field_name)
        return value if value is not None else ZERO_ESTIMATE


@dataclass(frozen=True)
class FoodItemPatch:
    """Manual override of an item's point values."""

    food_name: str | None = None
    calories: float | None = None
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    fiber_g: float | None = None
    grams: float | None = None


@dataclass(frozen=True)
class NutrientTotals:
    """Summed estimates for every tracked nutrient."""

    calories: NutrientEstimate = ZERO_ESTIMATE
    protein_g: NutrientEstimate = ZERO_ESTIMATE
    carbs_g: NutrientEstimate = ZERO_ESTIMATE
    fat_g: NutrientEstimate = ZERO_ESTIMATE
    saturated_fat_g: NutrientEstimate = ZERO_ESTIMATE
    unsaturated_fat_g: NutrientEstimate = ZERO_ESTIMATE
    fiber_g: NutrientEstimate = ZERO_ESTIMATE
    sodium_mg: NutrientEstimate = ZERO_ESTIMATE
    added_sugar_g: NutrientEstimate = ZERO_ESTIMATE

    def as_dict(self) -> dict[str, NutrientEstimate]:
        """Return totals keyed by nutrient field name."""
        return {name: getattr(self, name) for name in NUTRIENT_FIELDS}
