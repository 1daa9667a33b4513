"""Models for meal recommendations."""

from datetime import date

from pydantic import BaseModel

from meal_diary.domain.models import DiaryModel


class Recommendation(DiaryModel):
    """A candidate meal suggested for a slot."""

    name: str
    reason: str
    nutrition_highlights: str
    tags: tuple[str, ...]


class RecommendationBatch(DiaryModel):
    """Structured output wrapper for a recommendation request."""

    recommendations: list[Recommendation]


class HistoryDay(BaseModel):
    """Compact history entry sent as recommendation context."""

    date: date
    meals: list[str]
