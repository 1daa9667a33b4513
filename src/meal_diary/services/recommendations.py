"""Meal recommendations from the assistant."""

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from pydantic import TypeAdapter, ValidationError

from meal_diary.domain.diary import DayLog, MealType
from meal_diary.domain.errors import RecommendationFailed
from meal_diary.domain.models import UserProfile
from meal_diary.domain.recommendations import (
    HistoryDay,
    Recommendation,
    RecommendationBatch,
)
from meal_diary.services.assistant import AssistantClient, ModelOptions

HISTORY_DAYS = 7
RECOMMENDATION_COUNT = 3

RECOMMENDATION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "recommendations": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "reason": {
                        "type": "string",
                        "description": "Why this is good for her now",
                    },
                    "nutritionHighlights": {"type": "string"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                },
                "required": ["name", "reason", "nutritionHighlights", "tags"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["recommendations"],
    "additionalProperties": False,
}

_HISTORY_ADAPTER = TypeAdapter(list[HistoryDay])

_logger = logging.getLogger(__name__)


def build_history(logs: Iterable[DayLog], days: int = HISTORY_DAYS) -> list[HistoryDay]:
    """Reduce the most recent logs by date to their meal descriptions."""
    recent = sorted(logs, key=lambda log: log.date)[-days:]
    return [
        HistoryDay(date=log.date, meals=[meal.description for meal in log.meals])
        for log in recent
    ]


@dataclass
class RecommendationService:
    """Service requesting candidate meals for a slot."""

    client: AssistantClient | None
    options: ModelOptions

    async def recommend(
        self, slot: MealType, profile: UserProfile, recent_logs: Iterable[DayLog]
    ) -> list[Recommendation]:
        """Return suggested meals, or an empty list when anything fails."""
        try:
            return await self._request(slot, profile, build_history(recent_logs))
        except RecommendationFailed as exc:
            _logger.warning("Recommendations unavailable: %s", exc)
            return []

    async def _request(
        self, slot: MealType, profile: UserProfile, history: list[HistoryDay]
    ) -> list[Recommendation]:
        if self.client is None:
            raise RecommendationFailed("assistant is not configured")
        history_json = _HISTORY_ADAPTER.dump_json(history).decode("utf-8")
        prompt = (
            f"Suggest {RECOMMENDATION_COUNT} distinct options for {slot.label}.\n"
            f"User Context: {profile.to_context()}.\n"
            f"Recent History: {history_json}.\n"
            "Consider her cycle phase if provided.\n"
            "Return the options in the recommendations array."
        )
        try:
            raw = await self.client.generate_json(
                model=self.options.model,
                reasoning_effort=self.options.reasoning_effort,
                store=self.options.store,
                instructions=self.options.instructions,
                prompt=prompt,
                schema_name="meal_recommendations",
                schema=RECOMMENDATION_SCHEMA,
            )
            return RecommendationBatch.model_validate(raw).recommendations
        except (ValidationError, json.JSONDecodeError) as exc:
            raise RecommendationFailed("invalid response") from exc
        except Exception as exc:
            _logger.exception("Recommendation request failed")
            raise RecommendationFailed(str(exc)) from exc
