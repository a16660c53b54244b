"""User profile domain models."""

from dataclasses import dataclass
from typing import Literal

Sex = Literal["male", "female"]

DEFAULT_CALORIE_DEFICIT = 500


@dataclass(frozen=True)
class UserProfile:
    """Body stats and goals used for energy targets."""

    weight_kg: float | None = None
    height_cm: float | None = None
    age_years: int | None = None
    sex: Sex | None = None
    calorie_deficit: int = DEFAULT_CALORIE_DEFICIT
    timezone: str | None = None
    name: str | None = None
