"""Login gate, onboarding and profile updates."""

import logging
from dataclasses import dataclass

from meal_diary.domain.diary import AppState, AppView
from meal_diary.domain.errors import LoginRejected
from meal_diary.domain.models import UserProfile
from meal_diary.services.state import StateStore

_logger = logging.getLogger(__name__)


@dataclass
class AccountService:
    """Application service for the entry flow and the user profile."""

    store: StateStore
    username: str
    password: str

    def login(self, username: str, password: str) -> AppState:
        """Check the fixed credentials and route to onboarding or the dashboard."""
        if username != self.username or password != self.password:
            _logger.info("Rejected login for %s", username)
            raise LoginRejected("Invalid username or password")

        def route(state: AppState) -> AppState:
            view = AppView.DASHBOARD if state.user else AppView.ONBOARDING_PHASE_1
            return state.model_copy(update={"view": view})

        return self.store.update(route)

    def advance_onboarding(self) -> AppState:
        """Move from the long-term profile step to the current-status step."""
        return self.set_view(AppView.ONBOARDING_PHASE_2)

    def complete_onboarding(self, profile: UserProfile) -> AppState:
        """Store the profile and open the dashboard."""
        return self.store.update(
            lambda state: state.model_copy(
                update={"user": profile, "view": AppView.DASHBOARD}
            )
        )

    def update_profile(self, profile: UserProfile) -> AppState:
        """Replace the stored profile."""
        return self.store.update(
            lambda state: state.model_copy(update={"user": profile})
        )

    def set_view(self, view: AppView) -> AppState:
        """Switch the current screen."""
        return self.store.update(lambda state: state.model_copy(update={"view": view}))
