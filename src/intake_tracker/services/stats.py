"""Daily summaries and trend statistics."""

from collections import defaultdict
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from uuid import UUID

from intake_tracker.domain.energy import EnergyTargets
from intake_tracker.domain.nutrients import FoodItem
from intake_tracker.domain.stats import (
    DailySummary,
    DayStats,
    MetricAverage,
    PeriodAverages,
    TrendsReport,
)
from intake_tracker.services.activity import ActivityService
from intake_tracker.services.aggregation import aggregate_items
from intake_tracker.services.dates import today_in_timezone
from intake_tracker.services.energy import (
    PROTEIN_G_PER_KG,
    calculate_energy_targets,
    default_activity_level,
    round_half_up,
)
from intake_tracker.services.entries import EntryRepository
from intake_tracker.services.policy import nutrient_limits
from intake_tracker.services.user_settings import UserSettingsService

WEEK_DAYS = 7
MONTH_DAYS = 30


def build_day_stats(
    day: date, items: Iterable[FoodItem], targets: EnergyTargets | None
) -> DayStats:
    """Sum a day's point values and compare them with its targets."""
    totals = aggregate_items(items)
    calories = totals.calories.value
    protein = totals.protein_g.value
    deficit = None
    protein_percent = None
    if targets is not None:
        deficit = targets.tdee - calories
        if targets.protein_target_g:
            protein_percent = round_half_up(protein / targets.protein_target_g * 100)
    return DayStats(
        day=day,
        calories=calories,
        protein_g=protein,
        carbs_g=totals.carbs_g.value,
        fat_g=totals.fat_g.value,
        saturated_fat_g=totals.saturated_fat_g.value,
        fiber_g=totals.fiber_g.value,
        added_sugar_g=totals.added_sugar_g.value,
        sodium_mg=totals.sodium_mg.value,
        tdee=targets.tdee if targets else None,
        target_calories=targets.target_calories if targets else None,
        target_protein_g=targets.protein_target_g if targets else None,
        deficit=deficit,
        protein_percent=protein_percent,
    )


def compute_period_averages(days: list[DayStats]) -> PeriodAverages | None:
    """Average tracked days; None when there are none.

    Deficit and protein percent only average over the days that have them.
    """
    if not days:
        return None

    def mean_of(metric: Callable[[DayStats], float]) -> MetricAverage:
        return _mean([metric(day) for day in days])

    deficits = [day.deficit for day in days if day.deficit is not None]
    percents = [
        float(day.protein_percent) for day in days if day.protein_percent is not None
    ]
    return PeriodAverages(
        calories=mean_of(lambda day: day.calories),
        protein_g=mean_of(lambda day: day.protein_g),
        saturated_fat_g=mean_of(lambda day: day.saturated_fat_g),
        added_sugar_g=mean_of(lambda day: day.added_sugar_g),
        sodium_mg=mean_of(lambda day: day.sodium_mg),
        fiber_g=mean_of(lambda day: day.fiber_g),
        deficit=_mean(deficits) if deficits else None,
        protein_percent=_mean(percents) if percents else None,
        days_tracked=len(days),
    )


def trailing_window(days: list[DayStats], end: date, length: int) -> list[DayStats]:
    """Return day stats within the ``length`` days ending at ``end``."""
    start = end - timedelta(days=length - 1)
    return [day for day in days if start <= day.day <= end]


def _mean(values: list[float]) -> MetricAverage:
    return MetricAverage(
        value=round_half_up(sum(values) / len(values)), days_tracked=len(values)
    )


@dataclass
class StatsService:
    """Service for daily summaries and trend reports."""

    entry_repository: EntryRepository
    activity_service: ActivityService
    user_settings_service: UserSettingsService

    def get_daily_summary(
        self, user_id: UUID, day: date | None = None, now: datetime | None = None
    ) -> DailySummary:
        """Return totals, targets and entries for a day (default today)."""
        profile = self.user_settings_service.get_profile(user_id)
        if day is None:
            day = today_in_timezone(
                self.user_settings_service.timezone_for(profile), now
            )
        entries = self.entry_repository.list_entries(user_id, day, day)
        totals = aggregate_items(item for entry in entries for item in entry.items)
        level = self.activity_service.get_level(user_id, day)
        targets = calculate_energy_targets(profile, level)
        return DailySummary(
            day=day,
            totals=totals,
            activity_level=level,
            targets=targets,
            limits=nutrient_limits(
                targets.target_calories if targets else None, profile.sex
            ),
            entries=entries,
        )

    def get_trends(
        self, user_id: UUID, days: int = MONTH_DAYS, today: date | None = None
    ) -> TrendsReport:
        """Return per-day stats for tracked days with 7 and 30 day averages."""
        profile = self.user_settings_service.get_profile(user_id)
        if today is None:
            today = today_in_timezone(self.user_settings_service.timezone_for(profile))
        start = today - timedelta(days=max(days, MONTH_DAYS) - 1)

        items_by_day: dict[date, list[FoodItem]] = defaultdict(list)
        for entry in self.entry_repository.list_entries(user_id, start, today):
            items_by_day[entry.entry.resolved_date].extend(entry.items)
        levels = self.activity_service.levels_by_day(user_id, start, today)

        all_days = [
            build_day_stats(
                day,
                items_by_day[day],
                calculate_energy_targets(
                    profile, levels.get(day, default_activity_level())
                ),
            )
            for day in sorted(items_by_day)
        ]
        baseline = calculate_energy_targets(profile, default_activity_level())
        return TrendsReport(
            days=trailing_window(all_days, today, days),
            week=compute_period_averages(trailing_window(all_days, today, WEEK_DAYS)),
            month=compute_period_averages(
                trailing_window(all_days, today, MONTH_DAYS)
            ),
            limits=nutrient_limits(
                baseline.target_calories if baseline else None, profile.sex
            ),
            protein_target_g=(
                round_half_up(profile.weight_kg * PROTEIN_G_PER_KG)
                if profile.weight_kg
                else None
            ),
            calorie_deficit=profile.calorie_deficit,
        )
