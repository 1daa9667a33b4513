"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path

import pytest

from meal_diary.config import Settings
from meal_diary.containers import AppContainer
from meal_diary.domain.models import Goal, UserProfile
from meal_diary.services.account import AccountService
from meal_diary.services.assistant import AssistantClient, ModelOptions
from meal_diary.services.catalog import RecipeCatalog
from meal_diary.services.clock import Clock
from meal_diary.services.diary import DiaryService
from meal_diary.services.nutrition import NutritionResolver
from meal_diary.services.recommendations import RecommendationService
from meal_diary.services.reports import DailyReportService
from meal_diary.services.state import StateStorage, StateStore

TODAY = date(2024, 3, 14)


@dataclass
class FixedClock(Clock):
    """Clock frozen at a settable moment."""

    current: datetime = field(default_factory=lambda: datetime(2024, 3, 14, 12, 30))

    def now(self) -> datetime:
        return self.current

    def today(self) -> date:
        return self.current.date()


@dataclass
class InMemoryStateStorage(StateStorage):
    """In-memory blob storage for tests."""

    blobs: dict[str, str] = field(default_factory=dict)
    saves: int = 0

    def load(self, key: str) -> str | None:
        return self.blobs.get(key)

    def save(self, key: str, blob: str) -> None:
        self.saves += 1
        self.blobs[key] = blob


@dataclass
class FakeAssistantClient(AssistantClient):
    """Fake assistant returning canned payloads and recording calls."""

    json_payload: object = field(
        default_factory=lambda: {
            "calories": 430,
            "protein": "21g",
            "carbs": "52g",
            "fat": "12g",
            "tags": ["均衡"],
            "healthScore": 82,
            "feedback": "搭配不错哦！",
            "suggestion": None,
        }
    )
    text: str = "今天吃得很均衡，继续保持哦！"
    error: Exception | None = None
    gate: asyncio.Event | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

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
        self.calls.append(
            {
                "kind": "json",
                "schema_name": schema_name,
                "instructions": instructions,
                "prompt": prompt,
            }
        )
        await self._wait()
        if self.error is not None:
            raise self.error
        return self.json_payload

    async def generate_text(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        prompt: str,
    ) -> str:
        self.calls.append(
            {"kind": "text", "instructions": instructions, "prompt": prompt}
        )
        await self._wait()
        if self.error is not None:
            raise self.error
        return self.text

    def calls_of(self, kind: str, schema_name: str | None = None) -> list[dict]:
        return [
            call
            for call in self.calls
            if call["kind"] == kind
            and (schema_name is None or call.get("schema_name") == schema_name)
        ]

    async def _wait(self) -> None:
        if self.gate is not None:
            await self.gate.wait()


OPTIONS = ModelOptions(
    model="gpt-5.2", reasoning_effort=None, store=False, language="简体中文"
)


def make_profile(goal: Goal = Goal.MAINTAIN, weight: float = 52.0) -> UserProfile:
    return UserProfile(
        name="小林",
        gender="female",
        height=162,
        weight=weight,
        age=26,
        period_status="regular",
        recent_appetite="normal",
        sleep_quality="fair",
        energy_level="normal",
        health_status="有点累",
        goal=goal,
    )


def make_diary(
    client: FakeAssistantClient | None,
    storage: InMemoryStateStorage | None = None,
    clock: FixedClock | None = None,
) -> DiaryService:
    resolved_clock = clock or FixedClock()
    store = StateStore(storage=storage or InMemoryStateStorage(), clock=resolved_clock)
    return DiaryService(
        store=store,
        resolver=NutritionResolver(
            catalog=RecipeCatalog(), client=client, options=OPTIONS
        ),
        recommendation_service=RecommendationService(client=client, options=OPTIONS),
        report_service=DailyReportService(client=client, options=OPTIONS),
        clock=resolved_clock,
    )


@pytest.fixture
def profile() -> UserProfile:
    return make_profile()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def storage() -> InMemoryStateStorage:
    return InMemoryStateStorage()


@pytest.fixture
def assistant() -> FakeAssistantClient:
    return FakeAssistantClient()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(openai_api_key=None, state_dir=tmp_path / "state")


@pytest.fixture
def container(
    settings: Settings,
    storage: InMemoryStateStorage,
    clock: FixedClock,
    assistant: FakeAssistantClient,
) -> AppContainer:
    diary_service = make_diary(assistant, storage=storage, clock=clock)
    account_service = AccountService(
        store=diary_service.store,
        username=settings.login_username,
        password=settings.login_password,
    )

    async def close_resources() -> None:
        await diary_service.drain()

    return AppContainer(
        settings=settings,
        catalog=diary_service.resolver.catalog,
        state_store=diary_service.store,
        account_service=account_service,
        diary_service=diary_service,
        close_resources=close_resources,
    )
