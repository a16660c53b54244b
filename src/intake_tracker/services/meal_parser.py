"""Meal description parsing using LLMs."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from intake_tracker.domain.nutrients import NUTRIENT_COLUMNS, FoodItem, NutrientEstimate
from intake_tracker.domain.parsing import ParsedFoodItem, ParsedMeal

FAT_BREAKDOWN_TOLERANCE = 0.2
FAT_BREAKDOWN_MIN_G = 1

SYSTEM_PROMPT = """You are a nutrition analysis assistant. Parse free-form meal \
descriptions and return structured nutritional data.

RULES:
1. Never ask clarifying questions. Make reasonable assumptions and list them.
2. Use midpoint estimates. Prefer a wider confidence interval over false precision.
3. Include oils, sauces and cooking fats unless explicitly excluded.
4. Every numeric estimate needs a 90% confidence interval (low and high bounds).
5. Only set explicit_date when the user states when they ate the food \
("I had pizza yesterday", "lunch on Monday"). Phrases like "leftovers from \
yesterday" describe the food, not the meal date. When in doubt use null.
6. Resolve relative dates against today's date, which is provided. \
Return explicit_date as YYYY-MM-DD.

NUTRITION:
- Use standard USDA values as a baseline and adjust for preparation method.
- saturated_fat + unsaturated_fat should approximately equal total fat.
- added_sugar counts only sugars added in processing or cooking, never the \
natural sugars of whole fruit, plain dairy or vegetables.
- Return one item per distinct food; combine components of one dish."""

_NULLABLE_NUMBER = {"anyOf": [{"type": "number"}, {"type": "null"}]}


def _item_schema() -> dict[str, object]:
    properties: dict[str, object] = {
        "food_name": {"type": "string"},
        "grams": _NULLABLE_NUMBER,
        "grams_low": _NULLABLE_NUMBER,
        "grams_high": _NULLABLE_NUMBER,
    }
    for field_name, prefix in NUTRIENT_COLUMNS.items():
        properties[field_name] = {"type": "number"}
        properties[f"{prefix}_low"] = {"type": "number"}
        properties[f"{prefix}_high"] = {"type": "number"}
    properties["assumptions"] = {"type": "array", "items": {"type": "string"}}
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }


MEAL_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "items": {"type": "array", "items": _item_schema()},
        "explicit_date": {"anyOf": [{"type": "string"}, {"type": "null"}]},
    },
    "required": ["items", "explicit_date"],
    "additionalProperties": False,
}


class MealParserClient(Protocol):
    """Interface for LLM meal parsing."""

    async def parse(  # noqa: PLR0913
        self,
        *,
        model: str,
        temperature: float | None,
        store: bool,
        instructions: str,
        prompt: str,
        image_data_url: str | None,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Return structured meal data."""


@dataclass
class MealParserService:
    """Service that prepares meal prompts and validates results."""

    client: MealParserClient
    model: str
    temperature: float | None
    store: bool

    async def parse(
        self, meal_text: str, today: date, image_data_url: str | None = None
    ) -> ParsedMeal:
        """Parse a meal description, with today's date as context."""
        prompt = (
            f"Today's date is {today.isoformat()}.\n\n"
            "Parse the following meal description and return structured "
            f'nutritional data:\n\n"{meal_text}"'
        )
        if image_data_url:
            prompt += "\n\nA photo of the meal is attached; use it to judge portions."
        raw = await self.client.parse(
            model=self.model,
            temperature=self.temperature,
            store=self.store,
            instructions=SYSTEM_PROMPT,
            prompt=prompt,
            image_data_url=image_data_url,
            schema=MEAL_SCHEMA,
        )
        return ParsedMeal.model_validate(raw)


def validate_parsed_meal(meal: ParsedMeal) -> list[str]:
    """Return non-fatal warnings about an estimator response.

    Items are never rejected here: the point values are trusted even when
    the estimator's own interval or fat breakdown is inconsistent.
    """
    warnings: list[str] = []
    for item in meal.items:
        for field_name, prefix in NUTRIENT_COLUMNS.items():
            value = getattr(item, field_name)
            low = getattr(item, f"{prefix}_low")
            high = getattr(item, f"{prefix}_high")
            if not low <= value <= high:
                warnings.append(f"{item.food_name}: {prefix} range invalid")
            if value < 0:
                warnings.append(f"{item.food_name}: {field_name} is negative")

        fat_sum = item.saturated_fat_g + item.unsaturated_fat_g
        if (
            item.fat_g > FAT_BREAKDOWN_MIN_G
            and abs(fat_sum - item.fat_g) > item.fat_g * FAT_BREAKDOWN_TOLERANCE
        ):
            warnings.append(
                f"{item.food_name}: fat breakdown doesn't match total "
                f"({fat_sum:.1f} vs {item.fat_g:.1f})"
            )
    return warnings


def to_food_item(parsed: ParsedFoodItem) -> FoodItem:
    """Convert an estimator item into a domain food item."""
    estimates = {
        field_name: NutrientEstimate(
            value=getattr(parsed, field_name),
            low=getattr(parsed, f"{prefix}_low"),
            high=getattr(parsed, f"{prefix}_high"),
        )
        for field_name, prefix in NUTRIENT_COLUMNS.items()
    }
    grams = None
    if parsed.grams is not None:
        grams = NutrientEstimate(
            value=parsed.grams,
            low=parsed.grams_low if parsed.grams_low is not None else parsed.grams,
            high=parsed.grams_high if parsed.grams_high is not None else parsed.grams,
        )
    return FoodItem(
        food_name=parsed.food_name,
        grams=grams,
        assumptions=tuple(parsed.assumptions),
        **estimates,
    )
