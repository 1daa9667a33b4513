"""Nutrition domain models."""

import re

from pydantic import Field, field_validator

from meal_diary.domain.models import DiaryModel

_LEADING_NUMBER = re.compile(r"^\s*(\d+(?:\.\d+)?)")


class NutritionData(DiaryModel):
    """Nutrition facts and feedback attached to a single meal entry."""

    calories: float = Field(ge=0)
    protein: str | None = None
    carbs: str | None = None
    fat: str | None = None
    tags: tuple[str, ...]
    health_score: int = Field(ge=0, le=100)
    feedback: str
    suggestion: str | None = None

    @field_validator("health_score", mode="before")
    @classmethod
    def _round_score(cls, value: object) -> object:
        if isinstance(value, float):
            return round(value)
        return value


def parse_grams(quantity: str | None) -> float | None:
    """Return the leading decimal number of a quantity such as "14g"."""
    if not quantity:
        return None
    match = _LEADING_NUMBER.match(quantity)
    if match is None:
        return None
    return float(match.group(1))
