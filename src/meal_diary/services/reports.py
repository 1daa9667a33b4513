"""Daily summary reports from the assistant."""

import logging
from dataclasses import dataclass

from meal_diary.domain.diary import DayLog
from meal_diary.domain.errors import ReportFailed
from meal_diary.domain.models import UserProfile
from meal_diary.services.assistant import AssistantClient, ModelOptions

EMPTY_REPORT_TEXT = "今天也要加油哦！"
REPORT_FALLBACK_TEXT = "数据获取失败，但请记得爱自己！"

_logger = logging.getLogger(__name__)


@dataclass
class DailyReportService:
    """Service producing a short encouraging summary of a day."""

    client: AssistantClient | None
    options: ModelOptions

    async def summarize(self, day: DayLog, profile: UserProfile) -> str:
        """Return the report text, or a placeholder when it cannot be produced."""
        if not day.meals:
            raise ValueError("Daily report requires at least one meal")
        try:
            return await self._request(day, profile)
        except ReportFailed as exc:
            _logger.warning("Daily report unavailable for %s: %s", day.date, exc)
            return REPORT_FALLBACK_TEXT

    async def _request(self, day: DayLog, profile: UserProfile) -> str:
        if self.client is None:
            raise ReportFailed("assistant is not configured")
        prompt = (
            "Generate a short, encouraging daily summary report (max 100 words) "
            "based on today's meals and mood.\n"
            f"Day Log: {day.model_dump_json(by_alias=True)}.\n"
            f"User Profile: {profile.to_context()}.\n"
            "Address the user directly. Use a warm, caring tone."
        )
        try:
            text = await self.client.generate_text(
                model=self.options.model,
                reasoning_effort=self.options.reasoning_effort,
                store=self.options.store,
                instructions=self.options.instructions,
                prompt=prompt,
            )
        except Exception as exc:
            raise ReportFailed(str(exc) or type(exc).__name__) from exc
        return text.strip() or EMPTY_REPORT_TEXT
