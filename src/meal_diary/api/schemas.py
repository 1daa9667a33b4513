"""Pydantic models for API requests and responses."""

from datetime import date

from pydantic import Field

from meal_diary.domain.diary import DayLog, MealType, Mood
from meal_diary.domain.models import DiaryModel
from meal_diary.domain.recipes import RecipeRecord


class LoginRequest(DiaryModel):
    """Login form payload."""

    username: str
    password: str


class MealSubmission(DiaryModel):
    """Meal submission payload; text defaults to the slot's pending input."""

    description: str | None = None
    meal_type: MealType | None = None
    allow_unanalyzed: bool = False


class MoodUpdate(DiaryModel):
    """Mood update payload."""

    mood: Mood


class WeightUpdate(DiaryModel):
    """Weight update payload."""

    weight: float = Field(gt=0)


class WaterUpdate(DiaryModel):
    """Water intake payload in cups."""

    cups: int = Field(ge=0)


class AcceptRecommendation(DiaryModel):
    """Accepted recommendation payload."""

    name: str = Field(min_length=1)


class MealTypeOut(DiaryModel):
    """Live meal slot."""

    meal_type: MealType
    label: str


class RecipeOut(DiaryModel):
    """Catalog record for autocomplete."""

    name: str
    keywords: list[str]
    calories: float
    protein: str
    carbs: str
    fat: str
    tags: list[str]
    health_score: int

    @classmethod
    def from_record(cls, record: RecipeRecord) -> "RecipeOut":
        """Build the response model from a catalog record."""
        return cls(
            name=record.name,
            keywords=list(record.keywords),
            calories=record.calories,
            protein=record.protein,
            carbs=record.carbs,
            fat=record.fat,
            tags=list(record.tags),
            health_score=record.health_score,
        )


class ReportOut(DiaryModel):
    """Daily report state for a date."""

    date: date
    text: str | None
    pending: bool


class DayOut(DiaryModel):
    """Dashboard view of a date."""

    log: DayLog
    is_today: bool
    meal_type: MealType | None
    pending_inputs: dict[MealType, str]
    busy: list[str]


class CalendarDay(DiaryModel):
    """One cell of the weekly calendar strip."""

    date: date
    day_name: str
    is_today: bool
    has_meals: bool


class TrendOut(DiaryModel):
    """One chart point."""

    date: date
    mood: Mood
    health: float
    weight: float | None
