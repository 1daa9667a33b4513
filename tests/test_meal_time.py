"""Tests for meal slot classification."""

from datetime import datetime

import pytest

from meal_diary.domain.diary import MealType
from meal_diary.services.meal_time import (
    MEAL_TIME_SLOTS,
    classify_hour,
    current_meal_type,
)


def test_every_hour_maps_to_exactly_one_slot() -> None:
    for hour in range(24):
        matches = [slot for start, end, slot in MEAL_TIME_SLOTS if start <= hour < end]
        assert len(matches) == 1
        assert classify_hour(hour) == matches[0]


@pytest.mark.parametrize(
    ("hour", "expected"),
    [
        (0, MealType.BREAKFAST),
        (10, MealType.BREAKFAST),
        (11, MealType.LUNCH),
        (15, MealType.LUNCH),
        (16, MealType.DINNER),
        (23, MealType.DINNER),
    ],
)
def test_slot_boundaries(hour: int, expected: MealType) -> None:
    assert classify_hour(hour) == expected


@pytest.mark.parametrize("hour", [-1, 24])
def test_out_of_range_hour_is_rejected(hour: int) -> None:
    with pytest.raises(ValueError):
        classify_hour(hour)


def test_current_meal_type_uses_wall_clock_hour() -> None:
    assert current_meal_type(datetime(2024, 3, 14, 18, 5)) == MealType.DINNER
