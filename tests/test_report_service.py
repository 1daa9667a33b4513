"""Tests for daily reports."""

import asyncio
from datetime import date

import pytest

from meal_diary.domain.diary import DayLog, MealEntry, MealType
from meal_diary.services.reports import (
    EMPTY_REPORT_TEXT,
    REPORT_FALLBACK_TEXT,
    DailyReportService,
)
from tests.conftest import OPTIONS, FakeAssistantClient, make_profile

DAY = date(2024, 3, 14)


def _day_with_meal() -> DayLog:
    return DayLog(
        date=DAY,
        meals=(
            MealEntry(id="1", date=DAY, type=MealType.LUNCH, description="番茄炒蛋"),
        ),
    )


def test_summarize_returns_assistant_text() -> None:
    client = FakeAssistantClient(text="  做得很好！ ")
    service = DailyReportService(client=client, options=OPTIONS)

    text = asyncio.run(service.summarize(_day_with_meal(), make_profile()))

    assert text == "做得很好！"
    assert "番茄炒蛋" in client.calls[0]["prompt"]
    assert "max 100 words" in client.calls[0]["prompt"]


def test_empty_text_uses_encouragement() -> None:
    service = DailyReportService(client=FakeAssistantClient(text=""), options=OPTIONS)

    text = asyncio.run(service.summarize(_day_with_meal(), make_profile()))

    assert text == EMPTY_REPORT_TEXT


def test_errors_fall_back_to_placeholder() -> None:
    client = FakeAssistantClient(error=TimeoutError())
    service = DailyReportService(client=client, options=OPTIONS)

    text = asyncio.run(service.summarize(_day_with_meal(), make_profile()))

    assert text == REPORT_FALLBACK_TEXT


def test_missing_client_falls_back_to_placeholder() -> None:
    service = DailyReportService(client=None, options=OPTIONS)

    text = asyncio.run(service.summarize(_day_with_meal(), make_profile()))

    assert text == REPORT_FALLBACK_TEXT


def test_day_without_meals_is_never_sent() -> None:
    client = FakeAssistantClient()
    service = DailyReportService(client=client, options=OPTIONS)

    with pytest.raises(ValueError):
        asyncio.run(service.summarize(DayLog(date=DAY), make_profile()))

    assert client.calls == []
