"""Meal nutrition resolution via the recipe catalog or the assistant."""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass

from pydantic import ValidationError

from meal_diary.domain.errors import AnalysisFailed, AnalysisUnavailable
from meal_diary.domain.models import Goal, UserProfile
from meal_diary.domain.nutrition import NutritionData, parse_grams
from meal_diary.domain.recipes import RecipeRecord
from meal_diary.services.assistant import AssistantClient, ModelOptions
from meal_diary.services.catalog import RecipeCatalog

_logger = logging.getLogger(__name__)

_NULLABLE_STRING = {"anyOf": [{"type": "string"}, {"type": "null"}]}

ANALYSIS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "calories": {"type": "number", "minimum": 0},
        "protein": _NULLABLE_STRING,
        "carbs": _NULLABLE_STRING,
        "fat": _NULLABLE_STRING,
        "tags": {"type": "array", "items": {"type": "string"}},
        "healthScore": {"type": "number", "minimum": 0, "maximum": 100},
        "feedback": {"type": "string"},
        "suggestion": _NULLABLE_STRING,
    },
    "required": [
        "calories",
        "protein",
        "carbs",
        "fat",
        "tags",
        "healthScore",
        "feedback",
        "suggestion",
    ],
    "additionalProperties": False,
}

CALORIE_MODERATION_NOTE = "这道菜热量偏高，减脂期可以减少分量，再搭配一份蔬菜会更均衡哦。"
PROTEIN_BOOST_NOTE = "蛋白质稍微少了一点，增肌期可以加个鸡蛋或一杯牛奶来补充哦。"

SuggestionRule = tuple[Callable[[RecipeRecord, UserProfile], bool], str]


def _cuts_high_calorie(record: RecipeRecord, profile: UserProfile) -> bool:
    return profile.goal == Goal.LOSE_WEIGHT and record.calories > 500


def _builds_on_low_protein(record: RecipeRecord, profile: UserProfile) -> bool:
    if profile.goal != Goal.GAIN_MUSCLE:
        return False
    protein = parse_grams(record.protein)
    return protein is not None and protein < 15


# Evaluated in order; the first matching rule supplies the suggestion.
SUGGESTION_RULES: tuple[SuggestionRule, ...] = (
    (_cuts_high_calorie, CALORIE_MODERATION_NOTE),
    (_builds_on_low_protein, PROTEIN_BOOST_NOTE),
)


def suggestion_for(record: RecipeRecord, profile: UserProfile) -> str | None:
    """Return the first profile-conditioned suggestion that applies."""
    for predicate, text in SUGGESTION_RULES:
        if predicate(record, profile):
            return text
    return None


@dataclass
class NutritionResolver:
    """Resolve meal descriptions to nutrition data."""

    catalog: RecipeCatalog
    client: AssistantClient | None
    options: ModelOptions

    async def resolve(self, description: str, profile: UserProfile) -> NutritionData:
        """Return nutrition data from the catalog, else from the assistant."""
        text = description.strip()
        if not text:
            raise ValueError("Meal description must not be empty")

        record = self.catalog.exact_match(text)
        if record is not None:
            _logger.info("Catalog match for meal: %s", record.name)
            return _from_record(record, profile)

        if self.client is None:
            raise AnalysisUnavailable(text)
        return await self._analyze(text, profile)

    async def _analyze(self, description: str, profile: UserProfile) -> NutritionData:
        prompt = (
            f'Analyze the following meal: "{description}".\n'
            f"User context: {profile.to_context()}.\n"
            "Return a JSON object with nutritional estimates, tags, "
            "health score (0-100), feedback (gentle commentary), "
            "and a suggestion for improvement."
        )
        try:
            raw = await self.client.generate_json(
                model=self.options.model,
                reasoning_effort=self.options.reasoning_effort,
                store=self.options.store,
                instructions=self.options.instructions,
                prompt=prompt,
                schema_name="meal_analysis",
                schema=ANALYSIS_SCHEMA,
            )
            return NutritionData.model_validate(raw)
        except (ValidationError, json.JSONDecodeError) as exc:
            _logger.warning("Meal analysis returned invalid data: %s", exc)
            raise AnalysisFailed(description, "invalid response") from exc
        except Exception as exc:
            _logger.exception("Meal analysis request failed")
            raise AnalysisFailed(description, str(exc) or type(exc).__name__) from exc


def _from_record(record: RecipeRecord, profile: UserProfile) -> NutritionData:
    return NutritionData(
        calories=record.calories,
        protein=record.protein,
        carbs=record.carbs,
        fat=record.fat,
        tags=record.tags,
        health_score=record.health_score,
        feedback=record.default_feedback,
        suggestion=suggestion_for(record, profile),
    )
