"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date

from intake_tracker.domain.activity import ActivityLevel
from intake_tracker.domain.energy import EnergyTargets
from intake_tracker.domain.entries import EntryWithItems
from intake_tracker.domain.nutrients import NutrientTotals


@dataclass(frozen=True)
class DayStats:
    """Point-value totals for one day with its targets."""

    day: date
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    saturated_fat_g: float
    fiber_g: float
    added_sugar_g: float
    sodium_mg: float
    tdee: int | None = None
    target_calories: int | None = None
    target_protein_g: int | None = None
    deficit: float | None = None
    protein_percent: int | None = None


@dataclass(frozen=True)
class MetricAverage:
    """Mean of one metric and the number of days it covers."""

    value: int
    days_tracked: int


@dataclass(frozen=True)
class PeriodAverages:
    """Averages over a window of tracked days."""

    calories: MetricAverage
    protein_g: MetricAverage
    saturated_fat_g: MetricAverage
    added_sugar_g: MetricAverage
    sodium_mg: MetricAverage
    fiber_g: MetricAverage
    deficit: MetricAverage | None
    protein_percent: MetricAverage | None
    days_tracked: int


@dataclass(frozen=True)
class NutrientLimits:
    """Guideline thresholds used for compliance colouring."""

    saturated_fat_limit_g: int
    sodium_limit_mg: int
    sodium_ideal_mg: int
    added_sugar_limit_g: int
    fiber_target_g: int


@dataclass(frozen=True)
class DailySummary:
    """Everything the UI shows for a single day."""

    day: date
    totals: NutrientTotals
    activity_level: ActivityLevel
    targets: EnergyTargets | None
    limits: NutrientLimits
    entries: list[EntryWithItems]


@dataclass(frozen=True)
class TrendsReport:
    """Per-day stats with rolling averages."""

    days: list[DayStats]
    week: PeriodAverages | None
    month: PeriodAverages | None
    limits: NutrientLimits
    protein_target_g: int | None
    calorie_deficit: int
