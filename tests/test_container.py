"""Tests for container wiring."""

import asyncio

from meal_diary.adapters.file_state_storage import FileStateStorage
from meal_diary.containers import build_container
from tests.conftest import FixedClock, InMemoryStateStorage


def test_build_container_without_api_key(settings) -> None:
    container = build_container(settings, clock=FixedClock())

    assert isinstance(container.state_store.storage, FileStateStorage)
    assert container.diary_service.resolver.client is None
    assert container.account_service.store is container.state_store
    asyncio.run(container.close_resources())


def test_build_container_with_api_key(settings) -> None:
    keyed = settings.model_copy(update={"openai_api_key": "sk-test"})
    storage = InMemoryStateStorage()

    container = build_container(keyed, storage=storage, clock=FixedClock())

    assert container.state_store.storage is storage
    assert container.diary_service.resolver.client is not None
    assert container.diary_service.report_service.client is not None
    asyncio.run(container.close_resources())
