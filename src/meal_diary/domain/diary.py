"""Domain models for day logs and the persisted application state."""

from datetime import date
from enum import StrEnum

from pydantic import Field, model_validator

from meal_diary.domain.models import DiaryModel, UserProfile
from meal_diary.domain.nutrition import NutritionData


class MealType(StrEnum):
    """Meal slot an entry belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"

    @property
    def label(self) -> str:
        """Display label used in prompts and the UI."""
        return _MEAL_LABELS[self]


_MEAL_LABELS = {
    MealType.BREAKFAST: "早餐",
    MealType.LUNCH: "午餐",
    MealType.DINNER: "晚餐",
    MealType.SNACK: "加餐",
}


class Mood(StrEnum):
    """Mood recorded for a day."""

    HAPPY = "happy"
    CALM = "calm"
    TIRED = "tired"
    SAD = "sad"
    ANXIOUS = "anxious"
    EXCITED = "excited"


class AppView(StrEnum):
    """Screen the application is showing."""

    LOGIN = "LOGIN"
    ONBOARDING_PHASE_1 = "ONBOARDING_PHASE_1"
    ONBOARDING_PHASE_2 = "ONBOARDING_PHASE_2"
    DASHBOARD = "DASHBOARD"


class MealEntry(DiaryModel):
    """A logged meal."""

    id: str
    date: date
    type: MealType
    description: str
    nutrition: NutritionData | None = None
    is_recommended: bool = False


class DayLog(DiaryModel):
    """Everything recorded for one calendar date."""

    date: date
    mood: Mood = Mood.CALM
    weight: float | None = Field(default=None, gt=0)
    water_intake: int | None = Field(default=None, ge=0)
    meals: tuple[MealEntry, ...] = ()

    @classmethod
    def empty(cls, day: date) -> "DayLog":
        """Return the default log shown for a date with no records."""
        return cls(date=day)

    def with_meal(self, meal: MealEntry) -> "DayLog":
        """Return a copy with the meal appended."""
        return self.model_copy(update={"meals": (*self.meals, meal)})

    def average_health_score(self) -> float:
        """Average health score over meals, counting unscored meals as zero."""
        total = sum(
            meal.nutrition.health_score for meal in self.meals if meal.nutrition
        )
        return total / (len(self.meals) or 1)


class AppState(DiaryModel):
    """Single persisted root of the diary."""

    view: AppView = AppView.LOGIN
    user: UserProfile | None = None
    logs: dict[date, DayLog] = Field(default_factory=dict)
    current_date: date

    @model_validator(mode="after")
    def _check_log_keys(self) -> "AppState":
        for day, log in self.logs.items():
            if log.date != day:
                raise ValueError(f"Log keyed by {day} is dated {log.date}")
        return self

    def log_for(self, day: date) -> DayLog:
        """Return the stored log for a date or an unsaved default."""
        return self.logs.get(day) or DayLog.empty(day)

    def with_log(self, log: DayLog) -> "AppState":
        """Return a copy with the log stored under its date."""
        return self.model_copy(update={"logs": {**self.logs, log.date: log}})

    def sorted_logs(self) -> list[DayLog]:
        """Return logs ordered by date ascending."""
        return [self.logs[day] for day in sorted(self.logs)]
