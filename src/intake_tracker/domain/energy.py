"""Energy expenditure domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BmrEstimate:
    """Basal metabolic rate with a +/-10% band."""

    bmr: int
    bmr_low: int
    bmr_high: int


@dataclass(frozen=True)
class EnergyTargets:
    """TDEE and the calorie/protein targets derived from it."""

    bmr: int
    bmr_low: int
    bmr_high: int
    tdee: int
    tdee_low: int
    tdee_high: int
    target_calories: int
    target_calories_low: int
    target_calories_high: int
    protein_target_g: int
