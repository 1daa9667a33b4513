"""Application state container with whole-value persistence."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from meal_diary.domain.diary import AppState
from meal_diary.services.clock import Clock

_logger = logging.getLogger(__name__)


class StateStorage(Protocol):
    """Key-value persistence for the serialized state blob."""

    def load(self, key: str) -> str | None:
        """Return the stored blob for a key, if present."""

    def save(self, key: str, blob: str) -> None:
        """Store the blob under a key, replacing any previous value."""


def serialize_state(state: AppState) -> str:
    """Serialize the full application state."""
    return state.model_dump_json(by_alias=True)


def deserialize_state(blob: str) -> AppState:
    """Parse a serialized application state."""
    return AppState.model_validate_json(blob)


@dataclass
class StateStore:
    """Holds the current state snapshot and persists every change."""

    storage: StateStorage
    clock: Clock
    key: str = "appState"
    _state: AppState | None = field(default=None, init=False, repr=False)

    @property
    def state(self) -> AppState:
        """Return the current snapshot, loading it on first access."""
        if self._state is None:
            self._state = self.load()
        return self._state

    def load(self) -> AppState:
        """Read persisted state, always moving the current date to today."""
        today = self.clock.today()
        blob = self.storage.load(self.key)
        if blob is None:
            return AppState(current_date=today)
        loaded = deserialize_state(blob)
        _logger.info("Loaded state with %s day logs", len(loaded.logs))
        return loaded.model_copy(update={"current_date": today})

    def update(self, change: Callable[[AppState], AppState]) -> AppState:
        """Apply a change to the latest snapshot and persist the result."""
        updated = change(self.state)
        self.storage.save(self.key, serialize_state(updated))
        self._state = updated
        return updated

    def refresh_date(self) -> AppState:
        """Move the current date to today if the day has rolled over."""
        today = self.clock.today()
        if self.state.current_date == today:
            return self.state
        return self.update(
            lambda state: state.model_copy(update={"current_date": today})
        )
