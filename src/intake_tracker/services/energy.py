"""Energy expenditure calculations.

BMR uses the Mifflin-St Jeor equation:

    male:   10 * weight_kg + 6.25 * height_cm - 5 * age_years + 5
    female: 10 * weight_kg + 6.25 * height_cm - 5 * age_years - 161

TDEE is BMR times the day's activity multiplier. Interval endpoints combine
pairwise (low with low, high with high).
"""

import math

from intake_tracker.domain.activity import (
    ACTIVITY_LEVELS,
    DEFAULT_ACTIVITY_LEVEL_ID,
    ActivityLevel,
)
from intake_tracker.domain.energy import BmrEstimate, EnergyTargets
from intake_tracker.domain.profile import Sex, UserProfile

BMR_UNCERTAINTY = 0.10
PROTEIN_G_PER_KG = 1.6

_LEVELS_BY_ID = {level.id: level for level in ACTIVITY_LEVELS}


class UnknownActivityLevelError(ValueError):
    """Raised for an activity level id outside the fixed table."""


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def get_activity_level(level_id: int) -> ActivityLevel:
    """Return the activity level for an id."""
    try:
        return _LEVELS_BY_ID[level_id]
    except KeyError as exc:
        raise UnknownActivityLevelError(
            f"Unknown activity level: {level_id}"
        ) from exc


def default_activity_level() -> ActivityLevel:
    """Return the level used for days without a selection."""
    return _LEVELS_BY_ID[DEFAULT_ACTIVITY_LEVEL_ID]


def calculate_bmr(
    weight_kg: float, height_cm: float, age_years: int, sex: Sex
) -> BmrEstimate:
    """Return BMR with its band, each bound rounded from the raw value."""
    raw = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    raw += 5 if sex == "male" else -161
    return BmrEstimate(
        bmr=round_half_up(raw),
        bmr_low=round_half_up(raw * (1 - BMR_UNCERTAINTY)),
        bmr_high=round_half_up(raw * (1 + BMR_UNCERTAINTY)),
    )


def calculate_tdee(
    bmr: BmrEstimate,
    level: ActivityLevel,
    calorie_deficit: int,
    weight_kg: float,
) -> EnergyTargets:
    """Derive TDEE and calorie/protein targets from a BMR estimate."""
    tdee = round_half_up(bmr.bmr * level.multiplier)
    tdee_low = round_half_up(bmr.bmr_low * level.multiplier_low)
    tdee_high = round_half_up(bmr.bmr_high * level.multiplier_high)
    return EnergyTargets(
        bmr=bmr.bmr,
        bmr_low=bmr.bmr_low,
        bmr_high=bmr.bmr_high,
        tdee=tdee,
        tdee_low=tdee_low,
        tdee_high=tdee_high,
        target_calories=round_half_up(tdee - calorie_deficit),
        target_calories_low=round_half_up(tdee_low - calorie_deficit),
        target_calories_high=round_half_up(tdee_high - calorie_deficit),
        protein_target_g=round_half_up(weight_kg * PROTEIN_G_PER_KG),
    )


def calculate_energy_targets(
    profile: UserProfile, level: ActivityLevel
) -> EnergyTargets | None:
    """Return targets for a profile, or None when body stats are missing."""
    weight_kg = profile.weight_kg
    height_cm = profile.height_cm
    age_years = profile.age_years
    sex = profile.sex
    if weight_kg is None or height_cm is None or age_years is None or sex is None:
        return None
    bmr = calculate_bmr(weight_kg, height_cm, age_years, sex)
    return calculate_tdee(bmr, level, profile.calorie_deficit, weight_kg)
