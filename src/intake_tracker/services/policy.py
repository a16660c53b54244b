"""Nutrient guideline thresholds for compliance colouring."""

from typing import Literal

from intake_tracker.domain.profile import Sex
from intake_tracker.domain.stats import NutrientLimits
from intake_tracker.services.energy import round_half_up

ComplianceStatus = Literal["good", "warning", "bad"]

FALLBACK_TARGET_CALORIES = 2000
SATURATED_FAT_CALORIE_SHARE = 0.10
KCAL_PER_G_FAT = 9
SODIUM_LIMIT_MG = 2300
SODIUM_IDEAL_MG = 1500


def nutrient_limits(target_calories: int | None, sex: Sex | None) -> NutrientLimits:
    """Return guideline thresholds for a calorie target and sex."""
    calories = target_calories or FALLBACK_TARGET_CALORIES
    is_male = sex == "male"
    return NutrientLimits(
        saturated_fat_limit_g=round_half_up(
            calories * SATURATED_FAT_CALORIE_SHARE / KCAL_PER_G_FAT
        ),
        sodium_limit_mg=SODIUM_LIMIT_MG,
        sodium_ideal_mg=SODIUM_IDEAL_MG,
        added_sugar_limit_g=36 if is_male else 25,
        fiber_target_g=38 if is_male else 25,
    )


def limit_status(
    value: float, limit: float, warning: float | None = None
) -> ComplianceStatus:
    """Classify a nutrient that should stay under a limit."""
    if value > limit:
        return "bad"
    if warning is not None and value > warning:
        return "warning"
    return "good"


def target_status(value: float, target: float) -> ComplianceStatus:
    """Classify a nutrient that should reach a target."""
    return "good" if value >= target else "warning"
