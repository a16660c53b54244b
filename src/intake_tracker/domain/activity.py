"""Activity level domain models."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ActivityLevel:
    """Energy expenditure multiplier with its own uncertainty band."""

    id: int
    label: str
    description: str
    multiplier: float
    multiplier_low: float
    multiplier_high: float


@dataclass(frozen=True)
class DailyActivity:
    """Activity level selected for one day."""

    resolved_date: date
    activity_level_id: int


DEFAULT_ACTIVITY_LEVEL_ID = 3

ACTIVITY_LEVELS: tuple[ActivityLevel, ...] = (
    ActivityLevel(1, "Rest day", "Sedentary, little to no exercise", 1.2, 1.15, 1.25),
    ActivityLevel(2, "Light activity", "Light exercise or walking", 1.375, 1.3, 1.45),
    ActivityLevel(3, "Moderate activity", "Moderate exercise", 1.55, 1.5, 1.6),
    ActivityLevel(4, "Active day", "Hard exercise or physical work", 1.725, 1.65, 1.8),
    ActivityLevel(
        5, "Very active", "Very hard exercise or intense physical job", 1.9, 1.8, 2.0
    ),
)
