"""Interface to the hosted nutrition assistant model."""

from dataclasses import dataclass
from typing import Protocol

_SYSTEM_INSTRUCTION = (
    'You are "Pudding", a caring and professional AI nutritionist for young women. '
    "Your tone is gentle, warm, encouraging, empathetic and slightly playful. "
    "You use emojis occasionally. "
    "You balance professional nutritional science with emotional support. "
    "Always prioritize the user's health and well-being. "
    "Do not recommend extreme diets. "
    "Respond only in {language}."
)


def system_instruction(language: str) -> str:
    """Return the assistant persona instruction for a response language."""
    return _SYSTEM_INSTRUCTION.format(language=language)


@dataclass(frozen=True)
class ModelOptions:
    """Model selection shared by every assistant request."""

    model: str
    reasoning_effort: str | None
    store: bool
    language: str

    @property
    def instructions(self) -> str:
        """System-level instruction for the configured language."""
        return system_instruction(self.language)


class AssistantClient(Protocol):
    """Interface for LLM text and structured generation."""

    async def generate_json(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        prompt: str,
        schema_name: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Return a JSON object matching the schema."""

    async def generate_text(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        prompt: str,
    ) -> str:
        """Return free-form text."""
