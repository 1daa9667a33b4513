"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from meal_diary.adapters.file_state_storage import FileStateStorage
from meal_diary.adapters.openai_assistant_client import OpenAIAssistantClient
from meal_diary.adapters.supabase_state_storage import SupabaseStateStorage
from meal_diary.config import Settings
from meal_diary.services.account import AccountService
from meal_diary.services.assistant import ModelOptions
from meal_diary.services.catalog import RecipeCatalog
from meal_diary.services.clock import Clock, SystemClock
from meal_diary.services.diary import DiaryService
from meal_diary.services.nutrition import NutritionResolver
from meal_diary.services.recommendations import RecommendationService
from meal_diary.services.reports import DailyReportService
from meal_diary.services.state import StateStorage, StateStore

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog: RecipeCatalog
    state_store: StateStore
    account_service: AccountService
    diary_service: DiaryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None,
    *,
    storage: StateStorage | None = None,
    clock: Clock | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_clock = clock or SystemClock(resolved_settings.timezone)
    resolved_storage = storage or _build_storage(resolved_settings)
    options = ModelOptions(
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        language=resolved_settings.response_language,
    )
    assistant_client = None
    if resolved_settings.assistant_enabled:
        assistant_client = OpenAIAssistantClient.create(
            resolved_settings.openai_api_key
        )
    else:
        _logger.warning("OPENAI_API_KEY is not set; AI features are disabled")

    catalog = RecipeCatalog()
    state_store = StateStore(
        storage=resolved_storage,
        clock=resolved_clock,
        key=resolved_settings.state_key,
    )
    account_service = AccountService(
        store=state_store,
        username=resolved_settings.login_username,
        password=resolved_settings.login_password,
    )
    diary_service = DiaryService(
        store=state_store,
        resolver=NutritionResolver(
            catalog=catalog, client=assistant_client, options=options
        ),
        recommendation_service=RecommendationService(
            client=assistant_client, options=options
        ),
        report_service=DailyReportService(client=assistant_client, options=options),
        clock=resolved_clock,
    )

    async def close_resources() -> None:
        await diary_service.drain()
        if assistant_client is not None:
            await assistant_client.close()

    return AppContainer(
        settings=resolved_settings,
        catalog=catalog,
        state_store=state_store,
        account_service=account_service,
        diary_service=diary_service,
        close_resources=close_resources,
    )


def _build_storage(settings: Settings) -> StateStorage:
    if settings.supabase_enabled:
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseStateStorage(client)
    return FileStateStorage(settings.state_dir)
