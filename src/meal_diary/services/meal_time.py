"""Meal slot classification by wall-clock hour."""

from datetime import datetime

from meal_diary.domain.diary import MealType

# Half-open [start, end) hour ranges covering 0-23 exactly once.
MEAL_TIME_SLOTS: tuple[tuple[int, int, MealType], ...] = (
    (0, 11, MealType.BREAKFAST),
    (11, 16, MealType.LUNCH),
    (16, 24, MealType.DINNER),
)


def classify_hour(hour: int) -> MealType:
    """Return the meal slot for an hour of the day."""
    for start, end, meal_type in MEAL_TIME_SLOTS:
        if start <= hour < end:
            return meal_type
    raise ValueError(f"Hour out of range: {hour}")


def current_meal_type(now: datetime) -> MealType:
    """Return the meal slot for a local wall-clock time."""
    return classify_hour(now.hour)
