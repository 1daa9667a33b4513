"""Domain models for the meal diary user."""

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DiaryModel(BaseModel):
    """Immutable model serialized with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Goal(StrEnum):
    """Long-term dietary goal."""

    MAINTAIN = "maintain"
    LOSE_WEIGHT = "lose_weight"
    GAIN_MUSCLE = "gain_muscle"
    HEALTH = "health"


class UserProfile(DiaryModel):
    """Long-term attributes and short-term state of the diary owner."""

    name: str
    gender: str = Field(default="female", pattern="^(female|male)$")
    height: float = Field(gt=0)
    weight: float = Field(gt=0)
    age: int = Field(gt=0)
    period_status: str | None = Field(
        default=None, pattern="^(regular|irregular|none)$"
    )
    period_last_date: date | None = None
    dietary_restrictions: str | None = None
    recent_appetite: str = Field(
        default="normal", pattern="^(good|normal|poor|cravings)$"
    )
    sleep_quality: str = Field(default="good", pattern="^(good|fair|poor)$")
    energy_level: str = Field(default="normal", pattern="^(high|normal|low)$")
    health_status: str = ""
    goal: Goal = Goal.MAINTAIN

    def to_context(self) -> str:
        """Serialize the full profile for a remote prompt."""
        return self.model_dump_json(by_alias=True)
